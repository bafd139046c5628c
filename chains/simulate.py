"""
chains/simulate.py - Dev-inspect execution of composed view calls.

Pipeline:
1. Apply the compose closures to a fresh pysui transaction
2. Dev-inspect it with the acting sender (pysui resolves object inputs)
3. Return per-command return slots, or raise SimulationError verbatim

Nothing is committed, no gas is charged and no signature is needed;
the sender only fills the transaction context.
"""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from chains.providers import SuiRPCProvider
from core.constants import ErrorCode, PLACEHOLDER_SENDER
from core.exceptions import SimulationError
from core.logging import get_logger
from core.validators import normalize_sui_address
from transactions.deepbook import Compose

logger = get_logger(__name__)


@dataclass
class ReturnValue:
    """One return slot: raw BCS bytes and the Move type the node reported."""
    raw: bytes
    type_tag: str


@dataclass
class CallResult:
    """Return slots of one command, in declaration order."""
    return_values: List[ReturnValue] = field(default_factory=list)

    @property
    def buffers(self) -> List[bytes]:
        return [rv.raw for rv in self.return_values]


def _slot_to_bytes(raw: Any) -> bytes:
    # Nodes return slot bytes as a list of ints; base64 is accepted too
    if isinstance(raw, str):
        return base64.b64decode(raw)
    return bytes(raw)


def parse_dev_inspect_results(result: Dict[str, Any]) -> List[CallResult]:
    """
    Turn a dev-inspect result into CallResults.

    Raises:
        SimulationError: if execution failed or the node reported an error
    """
    status = (result.get("effects") or {}).get("status") or {}
    error = result.get("error")
    if error or status.get("status", "success") != "success":
        message = error or status.get("error") or "Dev-inspect execution failed"
        raise SimulationError(
            message,
            details={"status": status},
        )

    call_results = []
    for command in result.get("results") or []:
        values = [
            ReturnValue(raw=_slot_to_bytes(slot[0]), type_tag=slot[1])
            for slot in command.get("returnValues") or []
        ]
        call_results.append(CallResult(return_values=values))
    return call_results


class SimulationAdapter:
    """
    Executes composed view calls in dev-inspect mode.

    Usage:
        adapter = SimulationAdapter(provider)
        results = await adapter.simulate([contract.mid_price(pool)], sender)
        slots = results[0].buffers
    """

    def __init__(self, provider: SuiRPCProvider):
        self.provider = provider

    async def simulate(
        self,
        calls: Sequence[Compose],
        sender: str = PLACEHOLDER_SENDER,
    ) -> List[CallResult]:
        """
        Dev-inspect calls, composed in order into one transaction, as sender.

        Returns:
            One CallResult per call, in call order

        Raises:
            SimulationError: node rejection or Move abort
            RPCError: transport failure on every endpoint
        """
        calls = list(calls)
        response = await self.provider.dev_inspect(calls, normalize_sui_address(sender))
        if not response.ok:
            raise SimulationError(
                str(response.error.get("message", response.error)),
                code=ErrorCode.SIMULATION_REJECTED,
                details={"error": response.error},
            )

        results = parse_dev_inspect_results(response.result or {})
        if len(results) != len(calls):
            raise SimulationError(
                f"Dev-inspect returned {len(results)} results for {len(calls)} calls",
                code=ErrorCode.SIMULATION_REJECTED,
                details={"calls": len(calls)},
            )

        logger.debug(
            "Dev-inspect completed",
            extra={"context": {
                "calls": len(calls),
                "latency_ms": response.latency_ms,
                "endpoint": response.endpoint_used,
            }},
        )
        return results
