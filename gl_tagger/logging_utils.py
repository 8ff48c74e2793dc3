"""Logging utilities for gl-tagger."""

from __future__ import annotations

import json
import logging
import sys


class StructuredFormatter(logging.Formatter):
    """Formatter that can emit JSON lines when configured."""

    def __init__(self, json_mode: bool = False):
        super().__init__()
        self.json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        if self.json_mode and hasattr(record, "tag_result"):
            return json.dumps(record.tag_result.to_dict())
        if self.json_mode:
            payload = {"level": record.levelname, "message": record.getMessage()}
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload)
        message = f"[{record.levelname:<7}] {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(json_mode: bool = False, debug: bool = False) -> logging.Logger:
    logger = logging.getLogger("gl-tagger")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(json_mode=json_mode))
    logger.addHandler(handler)
    return logger
