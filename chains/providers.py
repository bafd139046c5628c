"""
chains/providers.py - Sui node access through pysui with endpoint failover.

One pysui AsyncClient per endpoint, created on first use. pysui builds
the transaction, resolves its object inputs and runs dev-inspect.

Endpoints are tried in order. Failover happens only on transport
failures (httpx timeouts, connection and HTTP status errors). An error
answered by the node is a valid answer: it is returned on
RPCResponse.error and the next endpoint is not tried.
"""

import inspect
import os
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import httpx
from dotenv import load_dotenv
from pysui import AsyncClient, SuiConfig, SuiRpcResult
from pysui.sui.sui_txn import AsyncTransaction
from pysui.sui.sui_types.address import SuiAddress

from core.constants import DEFAULT_RPC_TIMEOUT_SECONDS, DEFAULT_RPC_URLS, ErrorCode
from core.exceptions import RPCError
from core.logging import get_logger
from core.time import elapsed_ms, now_ms
from transactions.deepbook import Compose

logger = get_logger(__name__)

# SUI_RPC_URL / SUI_SENDER_ADDRESS may come from .env
load_dotenv()


@dataclass
class RPCStats:
    """Per-endpoint counters."""
    url: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_latency_ms: int = 0
    last_error: str | None = None
    last_success_ts: int | None = None

    @property
    def avg_latency_ms(self) -> int:
        if not self.successful_requests:
            return 0
        return self.total_latency_ms // self.successful_requests

    @property
    def success_rate(self) -> float:
        if not self.total_requests:
            return 0.0
        return self.successful_requests / self.total_requests

    def record_success(self, latency_ms: int) -> None:
        self.total_requests += 1
        self.successful_requests += 1
        self.total_latency_ms += latency_ms
        self.last_success_ts = now_ms()

    def record_failure(self, reason: str) -> None:
        self.total_requests += 1
        self.failed_requests += 1
        self.last_error = reason


@dataclass
class RPCResponse:
    """One dev-inspect answer: the result dict or the node's error."""
    result: Any
    latency_ms: int
    endpoint_used: str
    error: dict | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_rpc_urls(env: str, rpc_urls: list[str] | None = None) -> list[str]:
    """
    Pick RPC endpoints.

    Explicit urls win, then SUI_RPC_URL (comma separated), then the
    public fullnode for env.
    """
    if rpc_urls:
        return list(rpc_urls)
    urls = [u.strip() for u in os.getenv("SUI_RPC_URL", "").split(",") if u.strip()]
    if urls:
        return urls
    return list(DEFAULT_RPC_URLS.get(env, ()))


def create_client(rpc_url: str, timeout_seconds: int) -> AsyncClient:
    """pysui client for one endpoint; no keys, dev-inspect needs no signature."""
    config = SuiConfig.user_config(rpc_url=rpc_url)
    return AsyncClient(config, request_timeout=httpx.Timeout(timeout_seconds))


def create_transaction(client: AsyncClient, sender: str) -> AsyncTransaction:
    return AsyncTransaction(client=client, initial_sender=SuiAddress(sender))


class SuiRPCProvider:
    """
    Dev-inspect runner over pysui clients, one per endpoint.

    Args:
        rpc_urls: Endpoints in failover order
        timeout_seconds: Per-request timeout
        client_factory: (url, timeout_seconds) -> client
        transaction_factory: (client, sender) -> transaction
    """

    def __init__(
        self,
        rpc_urls: list[str],
        timeout_seconds: int = DEFAULT_RPC_TIMEOUT_SECONDS,
        client_factory: Callable[[str, int], Any] = create_client,
        transaction_factory: Callable[[Any, str], Any] = create_transaction,
    ):
        self.rpc_urls = list(rpc_urls)
        self.timeout_seconds = timeout_seconds
        self._client_factory = client_factory
        self._transaction_factory = transaction_factory
        self._clients: dict[str, Any] = {}
        self.stats: dict[str, RPCStats] = {url: RPCStats(url=url) for url in self.rpc_urls}

    def _get_client(self, url: str) -> Any:
        if url not in self._clients:
            self._clients[url] = self._client_factory(url, self.timeout_seconds)
        return self._clients[url]

    async def close(self) -> None:
        clients, self._clients = self._clients, {}
        for client in clients.values():
            close = getattr(client, "close", None)
            if close is None:
                continue
            result = close()
            if inspect.isawaitable(result):
                await result

    async def _inspect(self, url: str, calls: Sequence[Compose], sender: str) -> tuple[Any, dict | None]:
        """
        One attempt against one endpoint.

        Returns:
            (result dict, None) or (None, node error)

        Raises:
            httpx.HTTPError: transport failure, try the next endpoint
        """
        txn = self._transaction_factory(self._get_client(url), sender)
        try:
            for compose in calls:
                await compose(txn)
        except ValueError as e:
            # pysui raises ValueError when the node cannot describe a
            # target function or an object argument
            return None, {"message": str(e)}

        result = await txn.inspect_all()
        if isinstance(result, SuiRpcResult):
            if result.is_ok():
                result = result.result_data
            elif isinstance(result.result_data, httpx.HTTPError):
                raise result.result_data
            else:
                return None, {"message": result.result_string}
        return result.to_dict(), None

    async def dev_inspect(self, calls: Sequence[Compose], sender: str) -> RPCResponse:
        """
        Compose calls into one transaction and dev-inspect it as sender.

        Returns:
            RPCResponse carrying the result dict or the node's error

        Raises:
            RPCError: no endpoint configured, or every endpoint failed
        """
        if not self.rpc_urls:
            raise RPCError("No RPC endpoints configured", code=ErrorCode.INFRA_RPC_ERROR)

        last_error: Exception | None = None

        for url in self.rpc_urls:
            stats = self.stats[url]
            start_ms = now_ms()
            try:
                result, error = await self._inspect(url, calls, sender)
            except httpx.TimeoutException as e:
                stats.record_failure(f"Timeout after {elapsed_ms(start_ms)}ms")
                last_error = e
                logger.debug(
                    f"RPC timeout on {url}",
                    extra={"context": {"method": "dev_inspect", "latency_ms": elapsed_ms(start_ms)}},
                )
                continue
            except httpx.HTTPError as e:
                stats.record_failure(str(e))
                last_error = e
                logger.debug(
                    f"RPC transport error on {url}: {e}",
                    extra={"context": {"method": "dev_inspect"}},
                )
                continue

            latency_ms = elapsed_ms(start_ms)
            stats.record_success(latency_ms)

            if error is not None:
                logger.debug(
                    f"RPC error from {url}",
                    extra={"context": {"method": "dev_inspect", "error": error}},
                )
            return RPCResponse(
                result=result,
                latency_ms=latency_ms,
                endpoint_used=url,
                error=error,
            )

        timed_out = isinstance(last_error, httpx.TimeoutException)
        raise RPCError(
            "All RPC endpoints failed for dev_inspect",
            code=ErrorCode.INFRA_TIMEOUT if timed_out else ErrorCode.INFRA_RPC_ERROR,
            details={
                "method": "dev_inspect",
                "endpoints_tried": len(self.rpc_urls),
                "last_error": str(last_error),
            },
        )

    def get_stats_summary(self) -> dict:
        return {
            url: {
                "total_requests": s.total_requests,
                "success_rate": round(s.success_rate, 3),
                "avg_latency_ms": s.avg_latency_ms,
                "last_error": s.last_error,
            }
            for url, s in self.stats.items()
        }
