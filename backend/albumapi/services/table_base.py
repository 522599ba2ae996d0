"""
Album API — Abstract Table Backend Interface
=============================================

What:  Abstract base class for the remote record store the albums live in.
Why:   AlbumService depends on three operations only; keeping them behind an
       interface lets tests substitute an in-memory table for Airtable.
How:   AirtableTable implements it over HTTP; tests implement it over a dict.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence


@dataclass(frozen=True)
class BackendRecord:
    """
    A record as held by the backend.

    Attributes:
        id:           Backend-assigned record identifier (e.g. recXXXXXXXXXXXXXX)
        fields:       Field name → untyped value; empty fields are omitted
        created_time: Creation timestamp as reported by the backend, if any
    """

    id: str
    fields: Dict[str, Any] = field(default_factory=dict)
    created_time: Optional[str] = None


class TableBackend(ABC):
    """
    Contract for a single remote table.

    Every method performs exactly one round trip and raises BackendError on
    any failure. Implementations never retry.
    """

    @abstractmethod
    async def list_records(self) -> List[BackendRecord]:
        """
        Fetch the records of the table in backend order.

        Returns:
            The records of the first page the backend returns. An empty table
            yields an empty list, never an error.
        """
        ...

    @abstractmethod
    async def get_record(self, record_id: str) -> Optional[BackendRecord]:
        """
        Fetch one record.

        Returns:
            The record, or None when the backend reports that no record with
            this identifier exists.
        """
        ...

    @abstractmethod
    async def create_records(
        self, records: Sequence[Mapping[str, Any]]
    ) -> List[BackendRecord]:
        """
        Create records from field maps.

        Args:
            records: One field map per record to create.

        Returns:
            The created records as stored by the backend (fields may differ
            from what was sent if the backend transforms them).
        """
        ...

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None
