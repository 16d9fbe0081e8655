"""Data transfer objects describing the outcome of history writes."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class HistoryWriteStatus(str, Enum):
    """Enumerate the possible outcomes of a history mutation."""

    SAVED = "saved"
    SKIPPED = "skipped"
    ENCODE_FAILED = "encode_failed"
    WRITE_FAILED = "write_failed"


@dataclass(slots=True)
class HistoryWriteResult:
    """Represent the result of persisting the search history."""

    status: HistoryWriteStatus
    message: str = ""
    entryCount: Optional[int] = None

    @property
    def failed(self) -> bool:
        """Return ``True`` when the document could not be persisted."""

        return self.status in (HistoryWriteStatus.ENCODE_FAILED, HistoryWriteStatus.WRITE_FAILED)

    def __bool__(self) -> bool:
        return self.status == HistoryWriteStatus.SAVED
