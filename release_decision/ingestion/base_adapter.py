"""
Base adapter interface for comparison result sources.

Defines the contract that adapters reading the comparison subsystem's
output must implement, plus shared health reporting.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from decisioning.models import ComparisonResult


@dataclass
class SourceHealth:
    """Health status of a source adapter."""
    source_id: str
    is_healthy: bool
    last_fetch: Optional[datetime]
    records_fetched: int
    error_message: Optional[str] = None


class BaseAdapter(ABC):
    """
    Abstract base class for comparison result adapters.

    All adapters must implement fetch() and normalize().
    Provides shared health check functionality.
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.source_id: str = ""
        self._last_fetch: Optional[datetime] = None
        self._last_error: Optional[str] = None
        self._records_fetched: int = 0

    @abstractmethod
    def fetch(self) -> List[ComparisonResult]:
        """
        Read all comparison results, in a stable order.

        Returns:
            List of ComparisonResult objects
        """
        pass

    @abstractmethod
    def normalize(self, raw_record: Dict[str, Any], **kwargs) -> ComparisonResult:
        """
        Transform a raw record written by the comparison subsystem.

        Args:
            raw_record: Parsed record
            **kwargs: Additional context (e.g., fallback module id)
        """
        pass

    def get_health(self) -> SourceHealth:
        """Return health status of this adapter."""
        return SourceHealth(
            source_id=self.source_id,
            is_healthy=self._last_error is None,
            last_fetch=self._last_fetch,
            records_fetched=self._records_fetched,
            error_message=self._last_error
        )
