"""
Message store implementations.

The application talks to a ``MessageStore``; the production store is a flat
JSON array file, tests can swap in ``InMemoryMessageStore``. Stored records
are kept exactly as written: appending never rewrites earlier entries.
Neither store coordinates concurrent writers: two submissions racing on the
file's read-modify-write cycle can lose one of them.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

from fastapi import Request

from contact_site.models.contact import ContactMessage

# Set up logger
logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class MessageStore(ABC):
    """Ordered, append-only collection of contact messages"""

    @abstractmethod
    def ensure_exists(self) -> bool:
        """Create an empty store if none exists. Returns True if one was created."""

    @abstractmethod
    def append(self, message: ContactMessage) -> Record:
        """Persist ``message`` after every record already stored"""

    @abstractmethod
    def list(self) -> List[Record]:
        """Return all records as stored, in submission order"""

    def describe(self) -> str:
        return type(self).__name__


class JsonFileMessageStore(MessageStore):
    """Messages kept as one pretty-printed JSON array on disk"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def ensure_exists(self) -> bool:
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("[]", encoding="utf-8")
        logger.info(f"Created empty message store at {self.path}")
        return True

    def _read(self) -> List[Record]:
        records = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(records, list):
            raise ValueError(f"Message store {self.path} does not hold a JSON array")
        return records

    def append(self, message: ContactMessage) -> Record:
        self.ensure_exists()
        records = self._read()
        record = message.to_record()
        records.append(record)
        self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        return record

    def list(self) -> List[Record]:
        self.ensure_exists()
        return self._read()

    def describe(self) -> str:
        return str(self.path)


class InMemoryMessageStore(MessageStore):
    def __init__(self, records: List[Record] = None):
        self._records = list(records or [])

    def ensure_exists(self) -> bool:
        return False

    def append(self, message: ContactMessage) -> Record:
        record = message.to_record()
        self._records.append(record)
        return record

    def list(self) -> List[Record]:
        return list(self._records)

    def describe(self) -> str:
        return "memory"


def get_store(request: Request) -> MessageStore:
    """Returns the message store attached to the running application"""
    return request.app.state.message_store
