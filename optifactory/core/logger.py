"""Structured logging: rotating app log plus JSONL operation and solve records."""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional

OPERATIONS_FILE = "operations.jsonl"
SOLVES_FILE = "solves.jsonl"


class StructuredLogger:
    """Loggers writing to the same directory share one app logger and handler."""

    _users: dict[str, int] = {}

    def __init__(self, log_dir: str = "data/logs", level: str = "INFO"):
        self._log_dir = log_dir
        self._closed = False
        os.makedirs(log_dir, exist_ok=True)
        self._setup_app_logger(level)

    @staticmethod
    def app_logger_name(log_dir: str) -> str:
        # No dots past the prefix: one logger per directory, no placeholder parents.
        return "optifactory.app:" + os.path.abspath(log_dir).replace(".", "_")

    def _setup_app_logger(self, level: str) -> None:
        name = self.app_logger_name(self._log_dir)
        self._app_logger = logging.getLogger(name)
        self._users[name] = self._users.get(name, 0) + 1
        self._app_logger.propagate = False
        if not self._app_logger.handlers:
            handler = RotatingFileHandler(
                os.path.join(self._log_dir, "app.log"),
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            self._app_logger.addHandler(handler)
        self._app_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    @property
    def app(self) -> logging.Logger:
        return self._app_logger

    @property
    def log_dir(self) -> str:
        return self._log_dir

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        name = self._app_logger.name
        self._users[name] -= 1
        if self._users[name] > 0:
            return
        del self._users[name]
        for handler in list(self._app_logger.handlers):
            handler.close()
            self._app_logger.removeHandler(handler)

    def _write_jsonl(self, filename: str, record: dict) -> None:
        filepath = os.path.join(self._log_dir, filename)
        with open(filepath, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")

    def log_operation(
        self,
        event_type: str,
        data: Optional[dict] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
            "data": data or {},
            "metadata": metadata or {},
        }
        self._write_jsonl(OPERATIONS_FILE, record)

    def log_solve(
        self,
        solver: str,
        problem: str,
        outputs: dict,
        solver_property: Optional[dict] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": "solve.completed",
            "solver": solver,
            "problem": problem,
            "property": solver_property or {},
            "outputs": outputs,
            "metadata": metadata or {},
        }
        self._write_jsonl(SOLVES_FILE, record)
