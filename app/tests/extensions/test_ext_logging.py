import logging

from extensions.ext_logging import (
    TraceIdFilter,
    TraceIdFormatter,
    init_logging,
    trace_id_generator,
    trace_id_var,
)


def make_record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)


class TestTraceId:
    def test_generator_is_hex(self):
        trace_id = trace_id_generator()
        assert len(trace_id) == 32
        int(trace_id, 16)

    def test_filter_copies_context_var(self):
        record = make_record()
        token = trace_id_var.set("abc123")
        try:
            assert TraceIdFilter().filter(record) is True
        finally:
            trace_id_var.reset(token)
        assert record.trace_id == "abc123"

    def test_formatter_without_filter(self):
        formatter = TraceIdFormatter("%(trace_id)s|%(message)s")
        assert formatter.format(make_record()) == "|hello"


class TestInitLogging:
    def test_configures_root_handlers(self, tmp_path, monkeypatch):
        from configs import app_config

        log_file = tmp_path / "logs" / "fluent_http.log"
        monkeypatch.setattr(app_config, "LOG_FILE", str(log_file))
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            init_logging()
            logging.getLogger("fluent_http.test").info("written")
            for handler in root.handlers:
                handler.flush()
            assert "written" in log_file.read_text()
            assert all(isinstance(h.formatter, TraceIdFormatter) for h in root.handlers)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)
