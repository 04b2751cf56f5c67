"""
Logging setup for the dashboard.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from proanaliz.config import config


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for production log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "table"):
            log_entry["table"] = record.table
        if hasattr(record, "role"):
            log_entry["role"] = record.role
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure root logging.

    Streamlit reruns the entry script on every interaction, so the handler
    is only attached once.
    """
    if level is None:
        level = config.log_level
    if json_output is None:
        json_output = config.log_json or config.is_prod

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(getattr(h, "_proanaliz", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
        ))
    handler._proanaliz = True
    root.addHandler(handler)

    # Quiet noisy libraries
    for name in ("urllib3", "watchdog", "PIL"):
        logging.getLogger(name).setLevel(logging.WARNING)
