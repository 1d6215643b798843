import errno

from sinklog.errors import FormatError, HandlerOpenError, SinklogError


def test_handler_open_error_message_and_fields():
    exc = HandlerOpenError("/var/log/app.log", "Permission denied", errno.EACCES)
    assert str(exc) == "cannot open log file '/var/log/app.log': Permission denied"
    assert exc.filename == "/var/log/app.log"
    assert exc.errno == errno.EACCES
    assert exc.strerror == "Permission denied"
    assert isinstance(exc, OSError) and isinstance(exc, SinklogError)


def test_handler_open_error_without_errno():
    exc = HandlerOpenError("x.log", "refused")
    assert exc.errno is None
    assert str(exc) == "cannot open log file 'x.log': refused"


def test_format_error_hierarchy():
    assert issubclass(FormatError, ValueError)
    assert issubclass(FormatError, SinklogError)
