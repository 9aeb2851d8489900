"""
In-memory capability registry.

Roles are plain strings; the pool core only depends on the `AccessGate`
interface, so a deployment can swap this for any external registry.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Set

from ..core.interfaces import AccessGate
from ..state.balances import Address


class RoleRegistry(AccessGate):
    def __init__(self) -> None:
        self._members: Dict[str, Set[Address]] = {}
        self._lock = threading.Lock()

    def has_role(self, role: str, account: Address) -> bool:
        with self._lock:
            return account in self._members.get(role, ())

    def grant_role(self, role: str, account: Address) -> None:
        with self._lock:
            self._members.setdefault(role, set()).add(account)

    def revoke_role(self, role: str, account: Address) -> None:
        with self._lock:
            members = self._members.get(role)
            if members is not None:
                members.discard(account)

    def members(self, role: str) -> List[Address]:
        """Holders of `role`, sorted for deterministic output."""
        with self._lock:
            return sorted(self._members.get(role, ()))
