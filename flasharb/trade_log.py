# flasharb/trade_log.py
"""
Append-only trade record (profit-log.txt).
One human-readable line per entry: '<ISO timestamp> | <message>'
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Union


class _IsoFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds")


class TradeLog:
    """Write-only; the bot never reads this file back"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        self._logger = logging.getLogger(f"flasharb.trade_log.{self.path.resolve()}")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        if not self._logger.handlers:
            handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
            handler.setFormatter(_IsoFormatter("%(asctime)s | %(message)s"))
            self._logger.addHandler(handler)

    def record(self, message: str) -> None:
        self._logger.info(message)
        for handler in self._logger.handlers:
            handler.flush()

    def close(self) -> None:
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)
