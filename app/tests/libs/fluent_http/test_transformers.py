from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, Field

from libs.fluent_http.transformers import form_encoded_transformer, json_transformer, to_dictionary


class LoginForm(BaseModel):
    user_name: str = Field(serialization_alias="username")
    password: str
    remember: bool | None = None


@dataclass
class Query:
    term: str
    page: int = field(default=1, metadata={"alias": "p"})
    lang: str | None = None


class Exploding:
    def __str__(self):
        raise RuntimeError("no string form")


class Plain:
    def __init__(self):
        self.name = "plain"
        self.broken = Exploding()
        self._private = "hidden"


class TestToDictionary:
    def test_pydantic_aliases_and_none(self):
        form = LoginForm(user_name="alice", password="secret")
        assert to_dictionary(form) == {"username": "alice", "password": "secret"}

    def test_dataclass_metadata_alias(self):
        assert to_dictionary(Query(term="cats")) == {"term": "cats", "p": "1"}

    def test_plain_object_skips_private_and_unprintable(self):
        assert to_dictionary(Plain()) == {"name": "plain"}

    def test_mapping(self):
        assert to_dictionary({"a": 1, "b": None}) == {"a": "1"}

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            to_dictionary(None)


class TestFormEncodedTransformer:
    def test_joins_pairs(self):
        assert form_encoded_transformer(Query(term="cats", page=2)) == "term=cats&p=2"

    def test_encodes_reserved_characters(self):
        assert form_encoded_transformer({"q": "a&b c"}) == "q=a%26b+c"

    def test_empty_object(self):
        assert form_encoded_transformer({}) == ""

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            form_encoded_transformer(None)


class TestJsonTransformer:
    def test_dict_is_compact(self):
        assert json_transformer({"id": 1}) == '{"id":1}'

    def test_pydantic_model_uses_aliases(self):
        form = LoginForm(user_name="alice", password="secret")
        assert json_transformer(form) == '{"username":"alice","password":"secret","remember":null}'

    def test_dataclass(self):
        assert json_transformer(Query(term="cats")) == '{"term":"cats","page":1,"lang":null}'

    def test_none_yields_no_payload(self):
        assert json_transformer(None) is None
