from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Client


class ClientRepository(Protocol):
    def get_by_id(self, client_id: int) -> Optional[Client]:
        raise NotImplementedError

    def list_assigned_to(self, employee_id: int) -> Sequence[Client]:
        """Clients with an assignment row for this employee."""

        raise NotImplementedError
