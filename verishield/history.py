"""
Recent analyses, newest first, bounded to the last HISTORY_LIMIT results.
"""

import logging
from collections import deque

from .config import HISTORY_LIMIT
from .models import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisHistory:

    def __init__(self, limit: int = HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._results = deque(maxlen=limit)

    def record(self, result: AnalysisResult) -> None:
        """Add a result at the front, evicting the oldest when full."""
        if len(self._results) == self.limit:
            logger.debug(f"History full, evicting {self._results[-1].id}")
        self._results.appendleft(result)

    def list(self) -> list:
        return list(self._results)

    def get(self, analysis_id: str):
        """Stored result with this id, or None."""
        for result in self._results:
            if result.id == analysis_id:
                return result
        return None

    def clear(self) -> None:
        self._results.clear()

    def __len__(self):
        return len(self._results)
