from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    """Repository interface for roster entries.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def save(self, subject: Subject) -> None:
        """Insert or replace by subject id."""

        raise NotImplementedError
