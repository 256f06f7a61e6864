from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_requests(self, *, subject_id: Optional[str] = None) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def add(self, request: LeaveRequest) -> None:
        raise NotImplementedError
