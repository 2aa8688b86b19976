# ownership_prover/errors.py
"""Error kinds raised while producing an ownership attestation.

Every error is terminal for the request. The HTTP boundary collapses all of
them into one opaque JSON-RPC internal error, so the messages here are for the
local log only.
"""

from __future__ import annotations

from typing import Any, Optional


class ProverError(Exception):
    """Base class; ``stage`` is filled in by the request handler on failure."""

    def __init__(self, message: str, *, stage: Optional[Any] = None) -> None:
        super().__init__(message)
        self.stage = stage


class DecodeError(ProverError):
    """Calldata or destination address could not be decoded."""


class ConfigurationError(ProverError):
    """No usable endpoint or key for what the request needs."""


class OracleError(ProverError):
    """A read against a chain failed (revert, RPC error, unreachable node)."""


class ReplayError(ProverError):
    """The request's nonce is not the one the forwarding contract expects."""

    def __init__(self, message: str, *, expected: int, claimed: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.claimed = claimed
