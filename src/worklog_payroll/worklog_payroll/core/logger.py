"""Logging setup.

Loggers are children of ``worklog_payroll`` (use ``get_logger("worklogs")``);
``setup_logging`` is called once by ``create_app`` and installs a single
stream handler. Fields passed through ``extra=`` are appended as key=value.
"""
from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "worklog_payroll"

SENSITIVE_KEYS = {"password", "password_hash", "token", "authorization", "secret"}

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            k: v
            for k, v in record.__dict__.items()
            if k not in _RESERVED and k.lower() not in SENSITIVE_KEYS
        }
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        return line


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    log = logging.getLogger(PACKAGE_LOGGER)
    log.setLevel(level)

    # Avoid duplicate handlers when the app factory runs more than once
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(KeyValueFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        log.addHandler(handler)
        log.propagate = False

    return log
