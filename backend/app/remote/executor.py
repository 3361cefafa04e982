"""Async executor for remote calls (content extraction, AI completions).

Each call runs under a hard timeout and is recorded in metrics and structured
logs. There are no retries and no cancellation: a call either completes, fails,
or times out, and a failed call is surfaced to the caller as a
RemoteServiceError.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from backend.app.errors import ReaderError, RemoteServiceError
from backend.app.utils.logging import StructuredRemoteCallLogger
from backend.app.utils.metrics import PrometheusRemoteMetrics

T = TypeVar("T")


@dataclass(frozen=True)
class RemoteCallContext:
    """What is being called, for logs and error context."""

    service: str
    operation: str
    target: str | None = None


class RemoteMetrics(Protocol):
    """Metrics sink used by the executor."""

    def record_latency(self, service: str, outcome: str, latency_ms: float) -> None: ...

    def inc_error(self, service: str, reason: str) -> None: ...


class RemoteCallExecutor:
    """Runs remote coroutines with a timeout, metrics and logging."""

    def __init__(
        self,
        metrics: RemoteMetrics | None = None,
        call_logger: StructuredRemoteCallLogger | None = None,
    ) -> None:
        self._metrics = metrics or PrometheusRemoteMetrics()
        self._logger = call_logger or StructuredRemoteCallLogger()

    async def execute(
        self,
        ctx: RemoteCallContext,
        fn: Callable[[], Awaitable[T]],
        timeout_seconds: float,
        *,
        error_factory: Callable[[str], RemoteServiceError] | None = None,
    ) -> T:
        """Execute a remote call.

        Args:
            ctx: Call context (service, operation, target)
            fn: Zero-argument coroutine factory performing the call
            timeout_seconds: Hard timeout for the whole call
            error_factory: Builds the error raised on timeout or unexpected
                failure (default: RemoteServiceError carrying ``ctx``)

        Returns:
            Whatever ``fn`` returns

        Raises:
            RemoteServiceError: Call timed out or failed unexpectedly
            ReaderError: Domain errors raised by ``fn`` propagate unchanged
        """
        make_error = error_factory or _default_error_factory(ctx)
        start = time.monotonic()

        try:
            result = await asyncio.wait_for(fn(), timeout=timeout_seconds)
        except TimeoutError as e:
            self._record_failure(ctx, start, "timeout")
            raise make_error(f"timed out after {timeout_seconds}s") from e
        except ReaderError as e:
            self._record_failure(ctx, start, type(e).__name__)
            raise
        except Exception as e:
            self._record_failure(ctx, start, type(e).__name__)
            raise make_error(type(e).__name__) from e

        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.record_latency(ctx.service, "success", elapsed_ms)
        self._logger.log_call(ctx.service, ctx.operation, "success", elapsed_ms, target=ctx.target)
        return result

    def _record_failure(self, ctx: RemoteCallContext, start: float, reason: str) -> None:
        elapsed_ms = (time.monotonic() - start) * 1000
        outcome = "timeout" if reason == "timeout" else "error"
        self._metrics.record_latency(ctx.service, outcome, elapsed_ms)
        self._metrics.inc_error(ctx.service, reason)
        self._logger.log_call(
            ctx.service, ctx.operation, outcome, elapsed_ms, target=ctx.target, error_reason=reason
        )


def _default_error_factory(ctx: RemoteCallContext) -> Callable[[str], RemoteServiceError]:
    def make_error(reason: str) -> RemoteServiceError:
        return RemoteServiceError(
            f"{ctx.service}.{ctx.operation} failed: {reason}",
            service=ctx.service,
            operation=ctx.operation,
            target=ctx.target,
        )

    return make_error
