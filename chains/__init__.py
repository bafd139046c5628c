"""
chains/ - Sui ledger interaction layer.

Modules:
- providers: pysui clients with endpoint failover
- simulate: dev-inspect execution of composed view calls
"""

from chains.providers import (
    RPCResponse,
    RPCStats,
    SuiRPCProvider,
    resolve_rpc_urls,
)
from chains.simulate import (
    CallResult,
    ReturnValue,
    SimulationAdapter,
    parse_dev_inspect_results,
)

__all__ = [
    # Providers
    "RPCResponse",
    "RPCStats",
    "SuiRPCProvider",
    "resolve_rpc_urls",
    # Simulation
    "CallResult",
    "ReturnValue",
    "SimulationAdapter",
    "parse_dev_inspect_results",
]
