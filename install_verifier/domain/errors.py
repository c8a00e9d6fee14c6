"""Error taxonomy for installation verification."""
from __future__ import annotations

from typing import Sequence


class VerificationError(Exception):
    """Base class for errors that abort a verification run."""


class SystemInfoError(VerificationError):
    """The system-info document is unreadable or misses required keys."""

    def __init__(self, message: str, missing_keys: Sequence[str] = ()) -> None:
        self.missing_keys = tuple(missing_keys)
        if self.missing_keys:
            message = f"{message}: {', '.join(self.missing_keys)}"
        super().__init__(message)


class ComponentSpecError(VerificationError):
    """The expected-components document cannot be turned into components."""


class ResolutionError(VerificationError):
    """An actual-state source could not be read."""


class PreconditionError(VerificationError):
    """A resolver was called with inputs it cannot work with."""


class NoServiceNodeError(PreconditionError, IndexError):
    """Alert resolution needs at least one service-cluster node."""
