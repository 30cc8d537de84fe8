"""
Error reporting for line blame.

Diagnostics are printed with a bracketed prefix and kept in an
in-memory output channel so the HTTP bridge can show them.
"""

import traceback
from datetime import datetime, timezone
from typing import List


class ErrorHandler:
    """Output channel for diagnostics that are not shown to the user directly."""

    PREFIX = "[Blame]"

    def __init__(self, max_lines: int = 500):
        self._lines: List[str] = []
        self._max_lines = max_lines
        self._disposed = False

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def log_info(self, message: str) -> None:
        self._write("info", message)

    def log_error(self, error: BaseException) -> None:
        self._write("error", f"{type(error).__name__}: {error}")

    def log_critical(self, error: BaseException, message: str) -> None:
        self._write("critical", f"{message}: {type(error).__name__}: {error}")
        traceback.print_exception(type(error), error, error.__traceback__)

    def _write(self, level: str, message: str) -> None:
        print(f"{self.PREFIX} {message}")

        if self._disposed:
            return

        stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        self._lines.append(f"[{stamp} - {level}] {message}")

        # Keep the channel bounded
        if len(self._lines) > self._max_lines:
            del self._lines[:len(self._lines) - self._max_lines]

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._lines.clear()
