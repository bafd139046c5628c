# PATH: core/exceptions.py
"""
Typed exceptions for the DeepBook query client.

Three kinds reach callers of the query facade:
- NotFoundError: unknown manager/coin/pool key (local, fail-fast)
- DecodeError: malformed or truncated BCS return value
- SimulationError: the node rejected or aborted the dev-inspect call

No layer retries or swallows these; they propagate unchanged.
"""

import re
from typing import Optional

from core.constants import ErrorCode


class DeepBookError(Exception):
    """Base exception for the DeepBook query client."""

    default_code = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self):
        return f"[{self.code.value}] {self.message}"


class NotFoundError(DeepBookError):
    """Key was never registered or configured."""

    default_code = ErrorCode.NOT_FOUND


class DecodeError(DeepBookError):
    """Return value does not match the declared schema."""

    default_code = ErrorCode.DECODE_BAD_VALUE


# Matches the abort code in node messages such as
# "MoveAbort(MoveLocation { ... }, 3) in command 0"
_ABORT_CODE_RE = re.compile(r"MoveAbort\(.*,\s*(\d+)\)")


class SimulationError(DeepBookError):
    """
    Dev-inspect execution failed on the node.

    The node's message is kept verbatim; the Move abort code is
    extracted when present.
    """

    default_code = ErrorCode.SIMULATION_ABORTED

    def __init__(
        self,
        message: str,
        abort_code: Optional[int] = None,
        code: Optional[ErrorCode] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)
        self.abort_code = abort_code if abort_code is not None else parse_abort_code(message)


def parse_abort_code(message: str) -> Optional[int]:
    """Extract the Move abort code from a node error message."""
    match = _ABORT_CODE_RE.search(message or "")
    if match:
        return int(match.group(1))
    return None


class ValidationError(DeepBookError):
    """Invalid local input (e.g. float money)."""

    default_code = ErrorCode.VALIDATION_ERROR


class ConfigError(DeepBookError):
    """Configuration missing, malformed or not initialized."""

    default_code = ErrorCode.CONFIG_ERROR


class InfraError(DeepBookError):
    """Infrastructure-related errors (RPC, timeouts)."""

    default_code = ErrorCode.INFRA_RPC_ERROR


class RPCError(InfraError):
    """All RPC endpoints failed."""
    pass
