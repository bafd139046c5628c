"""
tests/unit/test_simulate.py - Dev-inspect adapter tests.
"""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from chains.providers import RPCResponse
from chains.simulate import (
    CallResult,
    ReturnValue,
    SimulationAdapter,
    parse_dev_inspect_results,
)
from core.constants import ErrorCode, PLACEHOLDER_SENDER
from core.exceptions import RPCError, SimulationError

POOL_ID = "0x" + "e05d".rjust(64, "0")
ABORT = (
    'MoveAbort(MoveLocation { module: ModuleId { address: 2c8d, name: Identifier("pool") }, '
    'function: 3, instruction: 10, function_name: Some("mid_price") }, 2) in command 0'
)


def rpc(result=None, error=None) -> RPCResponse:
    return RPCResponse(result=result, latency_ms=5, endpoint_used="https://node.example", error=error)


def u64_slot(value: int) -> list:
    return [list(value.to_bytes(8, "little")), "u64"]


class TestParseResults:

    def test_return_values(self):
        result = {
            "effects": {"status": {"status": "success"}},
            "results": [{"returnValues": [u64_slot(100), [[1], "bool"]]}],
        }
        parsed = parse_dev_inspect_results(result)
        assert parsed == [CallResult([
            ReturnValue((100).to_bytes(8, "little"), "u64"),
            ReturnValue(b"\x01", "bool"),
        ])]
        assert parsed[0].buffers[1] == b"\x01"

    def test_base64_slot(self):
        result = {"results": [{"returnValues": [[base64.b64encode(b"\x07").decode(), "u8"]]}]}
        assert parse_dev_inspect_results(result)[0].buffers == [b"\x07"]

    def test_command_without_return_values(self):
        assert parse_dev_inspect_results({"results": [{}]}) == [CallResult([])]

    def test_failure_status_raises_with_abort_code(self):
        result = {"effects": {"status": {"status": "failure", "error": ABORT}}}
        with pytest.raises(SimulationError) as exc_info:
            parse_dev_inspect_results(result)
        assert exc_info.value.abort_code == 2
        assert exc_info.value.code == ErrorCode.SIMULATION_ABORTED
        assert exc_info.value.message == ABORT

    def test_error_field_raises(self):
        with pytest.raises(SimulationError) as exc_info:
            parse_dev_inspect_results({"error": ABORT, "effects": {"status": {"status": "failure"}}})
        assert exc_info.value.abort_code == 2


class TestSimulationAdapter:

    @pytest.fixture
    def provider(self):
        provider = MagicMock()
        provider.dev_inspect = AsyncMock(return_value=rpc({
            "effects": {"status": {"status": "success"}},
            "results": [{"returnValues": [u64_slot(3_500_000)]}],
        }))
        return provider

    @pytest.fixture
    def adapter(self, provider):
        return SimulationAdapter(provider)

    @pytest.mark.asyncio
    async def test_simulate_returns_slots(self, adapter, provider):
        compose = AsyncMock()
        results = await adapter.simulate([compose])

        assert results[0].buffers == [(3_500_000).to_bytes(8, "little")]
        provider.dev_inspect.assert_awaited_once_with([compose], PLACEHOLDER_SENDER)

    @pytest.mark.asyncio
    async def test_sender_normalized(self, adapter, provider):
        await adapter.simulate([AsyncMock()], "0xABC")
        assert provider.dev_inspect.await_args.args[1] == "0x" + "abc".rjust(64, "0")

    @pytest.mark.asyncio
    async def test_abort_propagates(self, adapter, provider):
        provider.dev_inspect.return_value = rpc({
            "effects": {"status": {"status": "failure", "error": ABORT}},
            "error": ABORT,
        })
        with pytest.raises(SimulationError) as exc_info:
            await adapter.simulate([AsyncMock()])
        assert exc_info.value.abort_code == 2

    @pytest.mark.asyncio
    async def test_node_error_is_rejection(self, adapter, provider):
        provider.dev_inspect.return_value = rpc(error={"message": "Deserialization error"})
        with pytest.raises(SimulationError) as exc_info:
            await adapter.simulate([AsyncMock()])
        assert exc_info.value.code == ErrorCode.SIMULATION_REJECTED
        assert exc_info.value.message == "Deserialization error"

    @pytest.mark.asyncio
    async def test_missing_object_is_rejection(self, adapter, provider):
        message = f"Object {POOL_ID} not found"
        provider.dev_inspect.return_value = rpc(error={"message": message})
        with pytest.raises(SimulationError) as exc_info:
            await adapter.simulate([AsyncMock()])
        assert POOL_ID in exc_info.value.message

    @pytest.mark.asyncio
    async def test_result_count_mismatch(self, adapter, provider):
        provider.dev_inspect.return_value = rpc({"results": []})
        with pytest.raises(SimulationError) as exc_info:
            await adapter.simulate([AsyncMock()])
        assert exc_info.value.code == ErrorCode.SIMULATION_REJECTED

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(self, adapter, provider):
        provider.dev_inspect.side_effect = RPCError("All RPC endpoints failed")
        with pytest.raises(RPCError):
            await adapter.simulate([AsyncMock()])
