"""Body transformers for ``Request.set_transformer``.

A transformer turns the request body into the string payload of a POST.
"""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus

from pydantic import BaseModel
from pydantic_core import to_json

logger = logging.getLogger(__name__)


def _fields(obj: Any) -> list[tuple[str, Any]]:
    if isinstance(obj, BaseModel):
        return [
            (info.serialization_alias or info.alias or name, getattr(obj, name))
            for name, info in type(obj).model_fields.items()
        ]
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return [(f.metadata.get("alias", f.name), getattr(obj, f.name)) for f in dataclasses.fields(obj)]
    if isinstance(obj, Mapping):
        return [(str(key), value) for key, value in obj.items()]
    return [(name, value) for name, value in vars(obj).items() if not name.startswith("_")]


def to_dictionary(obj: Any) -> dict[str, str]:
    """Map the public fields of ``obj`` to their string values.

    Pydantic field aliases and the ``alias`` key of dataclass field metadata
    replace the field name. Fields set to None, and fields whose ``str()``
    raises, are left out.
    """
    if obj is None:
        raise ValueError("obj must not be None")

    result: dict[str, str] = {}
    for key, value in _fields(obj):
        if value is None:
            continue
        try:
            result[key] = str(value)
        except Exception:
            logger.debug(f"skipping field {key}: value cannot be converted to str")
    return result


def form_encoded_transformer(obj: Any) -> str:
    """Encode ``obj`` as application/x-www-form-urlencoded ``key=value&...``."""
    if obj is None:
        raise ValueError("obj must not be None")
    return "&".join(f"{quote_plus(key)}={quote_plus(value)}" for key, value in to_dictionary(obj).items())


def json_transformer(obj: Any) -> str | None:
    if obj is None:
        return None
    if isinstance(obj, BaseModel):
        return obj.model_dump_json(by_alias=True)
    return to_json(obj).decode("utf-8")
