import contextvars
import io
import json
import threading

import pytest

from ctxlog.config import LoggerConfig
from ctxlog.fields import field
from ctxlog.formatters import Formatter
from ctxlog.levels import Level
from ctxlog.logger import ContextLogger

REQUEST_CTX = {"requestId": "request-id", "userId": "user-id"}


def make_logger(formatter, level=Level.DEBUG, keys=("requestId", "userId"), exits=None):
    buf = io.StringIO()
    config = LoggerConfig(formatter=formatter, level=level, context_keys=keys)
    if exits is None:
        return ContextLogger(config, file=buf), buf
    return ContextLogger(config, file=buf, exit_func=exits.append), buf


def lines(buf):
    return buf.getvalue().splitlines()


def json_lines(buf):
    return [json.loads(line) for line in lines(buf)]


def test_simple_formatter_line():
    log, buf = make_logger(Formatter.SIMPLE)
    log.info(REQUEST_CTX, "Informational Message 1")
    log.infof(REQUEST_CTX, "Informational Message %d", 2)
    log.info({}, "no context")

    assert lines(buf) == [
        "Informational Message 1   | requestId=request-id | userId=user-id",
        "Informational Message 2   | requestId=request-id | userId=user-id",
        "no context",
    ]


def test_formatted_arguments_are_normalized():
    log, buf = make_logger(Formatter.SIMPLE, keys=())
    log.warnf(None, "payload %s from %s", {"b": 2, "a": 1}, "svc")
    assert lines(buf) == ['payload {"a":1,"b":2} from svc']


def test_plain_message_is_not_normalized():
    log, buf = make_logger(Formatter.JSON, keys=())
    log.info(None, {"b": 2, "a": 1})
    assert json_lines(buf)[0]["event"] == {"a": 1, "b": 2}


def test_explicit_field_overrides_context_field():
    log, buf = make_logger(Formatter.SIMPLE)
    log.info(REQUEST_CTX, "m", field("requestId", "override"), field("field1", "value1"))
    assert lines(buf) == ["m   | requestId=override | userId=user-id | field1=value1"]


def test_json_formatter_entry():
    log, buf = make_logger(Formatter.JSON)
    log.info(REQUEST_CTX, "Informational Message 2", field("field1", "value1"))
    log.error(REQUEST_CTX, "failed", field("err", ValueError("boom")))

    first, second = json_lines(buf)
    assert first["event"] == "Informational Message 2"
    assert first["level"] == "info"
    assert first["requestId"] == "request-id"
    assert first["userId"] == "user-id"
    assert first["field1"] == "value1"
    assert "timestamp" in first
    assert second["level"] == "error"
    assert second["err"] == "boom"


def test_text_formatter_entry():
    log, buf = make_logger(Formatter.TEXT)
    log.warn(REQUEST_CTX, "Warning Message 1")

    (line,) = lines(buf)
    assert line.startswith("timestamp=")
    assert "level='warning'" in line
    assert "event='Warning Message 1'" in line
    assert "requestId='request-id'" in line


def test_level_filtering():
    log, buf = make_logger(Formatter.JSON, level=Level.INFO)
    log.debug(REQUEST_CTX, "Debug Message 1")
    log.debugf(REQUEST_CTX, "Debug Message %d", 2)
    log.infof(REQUEST_CTX, "Informational Message %d", 3)

    assert [entry["event"] for entry in json_lines(buf)] == ["Informational Message 3"]


def test_every_level_is_emitted_at_debug():
    log, buf = make_logger(Formatter.JSON)
    log.debug(REQUEST_CTX, "d")
    log.info(REQUEST_CTX, "i")
    log.warn(REQUEST_CTX, "w")
    log.warningf(REQUEST_CTX, "w%d", 2)
    log.error(REQUEST_CTX, "e")
    log.errorf(REQUEST_CTX, "e%d", 2)

    assert [entry["level"] for entry in json_lines(buf)] == ["debug", "info", "warning", "warning", "error", "error"]


def test_missing_context_produces_no_fields():
    log, buf = make_logger(Formatter.JSON)
    log.info({}, "Informational Message 1")
    entry = json_lines(buf)[0]
    assert "requestId" not in entry
    assert "userId" not in entry


def test_context_variables_from_current_context():
    request_id = contextvars.ContextVar("request_id")
    log, buf = make_logger(Formatter.JSON, keys=(request_id,))

    def handle():
        request_id.set("abc")
        log.info(None, "handled")

    contextvars.copy_context().run(handle)
    log.info(None, "outside")

    handled, outside = json_lines(buf)
    assert handled["request_id"] == "abc"
    assert "request_id" not in outside


def test_with_context_exposes_bound_logger():
    log, buf = make_logger(Formatter.JSON)
    log.with_context(REQUEST_CTX).info("direct", extra=1)
    entry = json_lines(buf)[0]
    assert entry["requestId"] == "request-id"
    assert entry["extra"] == 1


def test_fatal_logs_then_exits():
    exits = []
    log, buf = make_logger(Formatter.JSON, level=Level.ERROR, exits=exits)
    log.fatal(REQUEST_CTX, ValueError("boom"))
    log.fatalf(REQUEST_CTX, "cannot start: %s", {"port": 80})

    assert exits == [1, 1]
    first, second = json_lines(buf)
    assert first["event"] == "boom"
    assert first["level"] == "critical"
    assert second["event"] == 'cannot start: {"port":80}'


def test_fatal_default_exit_raises_system_exit():
    buf = io.StringIO()
    log = ContextLogger(LoggerConfig(formatter=Formatter.SIMPLE), file=buf)
    with pytest.raises(SystemExit) as exc:
        log.fatal(None, "shutting down")
    assert exc.value.code == 1
    assert lines(buf) == ["shutting down"]


def test_concurrent_logging_writes_whole_lines():
    log, buf = make_logger(Formatter.JSON)

    def worker(n):
        for i in range(50):
            log.infof(REQUEST_CTX, "worker %d message %d", n, i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    entries = json_lines(buf)
    assert len(entries) == 400
    assert all(entry["requestId"] == "request-id" for entry in entries)


def test_any_field_name_is_accepted():
    log, buf = make_logger(Formatter.JSON, keys=("self", "requestId"))
    log.info({"self": "x", "requestId": "request-id"}, "m", field("logger", "y"))
    log.infof({"self": "x"}, "m%d", 2)

    first, second = json_lines(buf)
    assert first["self"] == "x"
    assert first["logger"] == "y"
    assert second["self"] == "x"


def test_event_field_does_not_replace_message():
    log, buf = make_logger(Formatter.JSON, keys=("event",))
    log.info({"event": "signup"}, "m", field("field1", "value1"))

    entry = json_lines(buf)[0]
    assert entry["event"] == "m"
    assert entry["fields.event"] == "signup"
    assert entry["field1"] == "value1"


def test_trace_level_emits_debug():
    log, buf = make_logger(Formatter.SIMPLE, level=Level.TRACE, keys=())
    log.debug(None, "Debug Message 1")
    assert lines(buf) == ["Debug Message 1"]
