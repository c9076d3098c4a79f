from plc_archive_tidy.models import ErrorLevel, ProcessError
from plc_archive_tidy.utils.error_handler import ErrorHandler, ScanError


def test_error_handler_levels() -> None:
    handler = ErrorHandler()
    handler.add(ProcessError(code="I-001", level=ErrorLevel.INFO, message="ok"))
    handler.add_warning(code="W-ARCHIVE", message="locked", file_path="a.ACD")
    handler.add_fatal(code="E-SCAN", message="fail")

    assert len(handler.get_by_level(ErrorLevel.INFO)) == 1
    assert len(handler.get_by_level(ErrorLevel.RECOVERABLE)) == 1
    assert len(handler.get_by_level(ErrorLevel.FATAL)) == 1
    assert handler.get_by_code("W-ARCHIVE")[0].as_pair() == ("a.ACD", "locked")
    assert handler.to_dicts()[1]["level"] == "W"


def test_scan_error_keeps_cause() -> None:
    cause = PermissionError("denied")
    error = ScanError("/plant", cause)

    assert error.cause is cause
    assert "/plant" in str(error)
    assert error.code == "E-SCAN"
