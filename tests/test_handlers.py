from datetime import datetime

import pytest

from sinklog.dedup import WarnOnceRegistry
from sinklog.errors import FormatError, HandlerOpenError
from sinklog.handlers import CallbackHandler, FileHandler, Handler, StdIOHandler
from sinklog.logger import Logger

TS = datetime(2025, 10, 4, 12, 30, 0)


def make_logger(name="handlers"):
    return Logger(name, warn_once_registry=WarnOnceRegistry())


def test_file_handler_appends_to_existing_file(tmp_path):
    path = tmp_path / "app.log"
    path.write_text("previous\n", encoding="utf-8")
    logger = make_logger()
    with FileHandler(str(path)) as handler:
        logger.add_handler(handler)
        logger.warn("disk full", "io.cpp", 42)
        logger.debug("second")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "previous"
    assert lines[1].endswith(": disk full (io.cpp:42)")
    assert lines[2].endswith(": second (unknown:-1)")


def test_file_handler_creates_missing_file(tmp_path):
    path = tmp_path / "new.log"
    handler = FileHandler(str(path))
    assert path.exists()
    handler.write(None, TS, "INFO", "hello")
    handler.close()
    assert path.read_text(encoding="utf-8") == "hello\n"


def test_file_handler_visible_before_close(tmp_path):
    path = tmp_path / "flush.log"
    handler = FileHandler(str(path))
    handler.write(None, TS, "INFO", "flushed")
    assert path.read_text(encoding="utf-8") == "flushed\n"
    handler.close()


def test_file_handler_open_failure_raises_at_construction(tmp_path):
    target = tmp_path / "missing-dir" / "app.log"
    with pytest.raises(HandlerOpenError) as excinfo:
        FileHandler(str(target))
    assert excinfo.value.filename == str(target)
    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.errno is not None
    assert str(excinfo.value).startswith(f"cannot open log file '{target}': ")
    assert "Errno" not in str(excinfo.value)


def test_write_after_close_is_dropped(tmp_path):
    path = tmp_path / "closed.log"
    handler = FileHandler(str(path))
    handler.close()
    handler.close()
    assert handler.closed
    handler.write(None, TS, "ERROR", "late")
    assert path.read_text(encoding="utf-8") == ""


def test_console_routes_error_to_stderr(capsys):
    handler = StdIOHandler()
    handler.write(None, TS, "INFO", "to stdout")
    handler.write(None, TS, "WARN", "also stdout")
    handler.write(None, TS, "ERROR", "to stderr")
    out, err = capsys.readouterr()
    assert out == "to stdout\nalso stdout\n"
    assert err == "to stderr\n"


def test_console_through_logger(capsys):
    logger = make_logger()
    logger.add_handler(StdIOHandler())
    logger.info("disk full", "io.cpp", 42)
    out, _ = capsys.readouterr()
    assert out.endswith("disk full (io.cpp:42)\n")


def test_console_color_uses_rich(capsys):
    pytest.importorskip("rich")
    handler = StdIOHandler(color=True)
    assert handler.color
    handler.write(None, TS, "ERROR", "red alert")
    _, err = capsys.readouterr()
    assert "red alert" in err
    assert "\x1b[" in err


def test_line_format_fields():
    lines = []
    logger = make_logger("fmt")
    logger.add_handler(CallbackHandler(lambda _l, _t, _lv, line: lines.append(line), line_format="{1} [{2}] {3}"))
    logger.error("boom", "b.py", 7)
    assert lines[0].startswith("ERROR [fmt] ")
    assert lines[0].endswith("boom (b.py:7)")


def test_line_format_timestamp(tmp_path):
    path = tmp_path / "ts.log"
    with FileHandler(str(path), line_format="{0} {1} {3}") as handler:
        handler.write(None, TS, "INFO", "msg")
    assert path.read_text(encoding="utf-8") == "2025-10-04T12:30:00 INFO msg\n"


def test_partial_line_format_still_delivers(capsys):
    lines = []
    CallbackHandler(lambda _l, _t, _lv, line: lines.append(line), line_format="[{1}] {3}").write(None, TS, "WARN", "msg")
    assert lines == ["[WARN] msg"]
    StdIOHandler(line_format="{1}: {3}").write(None, TS, "INFO", "hello")
    assert capsys.readouterr().out == "INFO: hello\n"


def test_out_of_range_line_format_rejected_at_construction(tmp_path):
    with pytest.raises(FormatError):
        CallbackHandler(lambda *args: None, line_format="{0} {5}")
    with pytest.raises(FormatError):
        FileHandler(str(tmp_path / "never.log"), line_format="{4}")


def test_color_console_is_reused_per_stream(capsys):
    pytest.importorskip("rich")
    handler = StdIOHandler(color=True)
    handler.write(None, TS, "INFO", "one")
    first = handler._consoles["stdout"]
    handler.write(None, TS, "WARN", "two")
    handler.write(None, TS, "ERROR", "three")
    assert handler._consoles["stdout"] is first
    assert set(handler._consoles) == {"stdout", "stderr"}
    out, err = capsys.readouterr()
    assert "one" in out and "two" in out and "three" in err


def test_base_handler_without_emit_is_best_effort():
    Handler().write(None, TS, "INFO", "nowhere")


def test_shared_handler_across_loggers(tmp_path):
    path = tmp_path / "shared.log"
    with FileHandler(str(path)) as handler:
        a, b = make_logger("a"), make_logger("b")
        a.add_handler(handler)
        b.add_handler(handler)
        a.info("from a")
        b.info("from b")
    text = path.read_text(encoding="utf-8")
    assert "from a" in text and "from b" in text
