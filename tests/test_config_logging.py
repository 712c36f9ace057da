import logging
from pathlib import Path

from config import AuditConfig
from logging_utils import get_error_info, log_exception, setup_render_logging


def test_defaults():
    assert AuditConfig.PRIORITY_WEIGHTS["P0"] > AuditConfig.PRIORITY_WEIGHTS["P1"] > AuditConfig.PRIORITY_WEIGHTS["P2"]
    assert AuditConfig.CONFIDENCE_STRONG > AuditConfig.CONFIDENCE_MEDIUM > AuditConfig.CONFIDENCE_WEAK
    assert AuditConfig.STRONG_COVERAGE == 0.8
    assert AuditConfig.MEDIUM_COVERAGE == 0.5


def test_render_logging_writes_file(tmp_path):
    root = logging.getLogger()
    previous = list(root.handlers), root.level
    try:
        logger, path = setup_render_logging(str(tmp_path / "logs"), "scan-1")
        logger.info("rendering")
        for handler in root.handlers:
            handler.flush()
        text = Path(path).read_text(encoding="utf-8")
        assert "Scan: scan-1" in text
        assert "rendering" in text
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous[0]
        root.setLevel(previous[1])


def test_error_info_and_logging(caplog):
    try:
        raise KeyError("missing")
    except KeyError as exc:
        info = get_error_info(exc, {"index": 2})
        with caplog.at_level(logging.ERROR):
            log_exception(logging.getLogger("tests"), exc, "render failed", scan_id="scan-1")

    assert info["error_type"] == "KeyError"
    assert info["context"] == {"index": 2}
    assert "KeyError" in info["traceback"]
    assert "render failed - Exception occurred: KeyError" in caplog.text
    assert "Scan: scan-1" in caplog.text
