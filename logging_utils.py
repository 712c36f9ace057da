"""
Logging Utilities for the Recommendation Pipeline

Provides centralized logging configuration and structured exception capture
so render runs and legacy enrichment leave an audit trail.
"""

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from config import AuditConfig


def setup_render_logging(log_dir: str, scan_id: str) -> Tuple[logging.Logger, str]:
    """
    Set up file-based logging for one recommendation render.
    Configures the ROOT logger so every module logger inherits the handlers.

    Args:
        log_dir: Directory where the log file is written
        scan_id: Scan identifier for context

    Returns:
        Tuple of (render_logger instance, log_file_path)
    """
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_filename = f"render_log_{timestamp}.log"
    log_file_path = str(Path(log_dir) / log_filename)

    Path(log_dir).mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.FileHandler(log_file_path, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, AuditConfig.LOG_LEVEL, logging.INFO))
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    render_logger = logging.getLogger('audit_render')
    render_logger.setLevel(logging.DEBUG)

    render_logger.info("=" * 70)
    render_logger.info("Recommendation Render - Run Log")
    render_logger.info(f"Scan: {scan_id}")
    render_logger.info(f"Log File: {log_filename}")
    render_logger.info(f"Started: {datetime.now().isoformat()}")
    render_logger.info("=" * 70)

    return render_logger, log_file_path


def log_exception(logger: logging.Logger, exc: Exception, context: str = "",
                  scan_id: Optional[str] = None, **kwargs) -> None:
    """
    Log an exception with traceback and context information.

    Args:
        logger: Logger instance to use
        exc: Exception that was raised
        context: Additional context string
        scan_id: Scan identifier for context
        **kwargs: Additional context key-value pairs
    """
    error_msg = f"Exception occurred: {type(exc).__name__}: {str(exc)}"
    if context:
        error_msg = f"{context} - {error_msg}"

    logger.error(error_msg)
    logger.debug(f"Traceback:\n{traceback.format_exc()}")

    if scan_id:
        logger.error(f"Scan: {scan_id}")

    if kwargs:
        logger.error(f"Context: {kwargs}")


def get_error_info(exc: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Extract structured error information from an exception.

    Args:
        exc: Exception that was raised
        context: Additional context dictionary

    Returns:
        Dictionary with error information
    """
    return {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
        "traceback": traceback.format_exc(),
        "timestamp": datetime.now().isoformat(),
        "context": context or {}
    }
