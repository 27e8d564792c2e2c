import abc
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from admin_gateway.core.config import Settings


class PolicyConfigError(RuntimeError):
    """POLICY_BACKEND names a backend that does not exist."""


class PolicyStore(abc.ABC):
    """Source of truth for platform-operator (superadmin) membership."""

    @abc.abstractmethod
    def is_superadmin(self, email: Optional[str]) -> bool: ...


# ───── Environment allow-list ─────────────────────────────────────────
class AllowListPolicyStore(PolicyStore):
    def __init__(self, emails: Iterable[str]):
        self._emails = frozenset(emails)

    def is_superadmin(self, email: Optional[str]) -> bool:
        # exact, case-sensitive match; the caller's email is not normalized
        if not email:
            return False
        return email in self._emails

    def __len__(self) -> int:
        return len(self._emails)


POLICY_BACKENDS = {
    "env": AllowListPolicyStore,
    # "table": TablePolicyStore, etc…
}


@lru_cache
def _build_store(backend: str, emails: Tuple[str, ...]) -> PolicyStore:
    try:
        factory = POLICY_BACKENDS[backend]
    except KeyError:
        raise PolicyConfigError(f"Unknown POLICY_BACKEND '{backend}'")
    return factory(emails)


def get_policy_store(settings: Settings) -> PolicyStore:
    """One store per backend and allow-list; raises PolicyConfigError."""
    return _build_store(settings.POLICY_BACKEND, tuple(settings.superadmin_emails))
