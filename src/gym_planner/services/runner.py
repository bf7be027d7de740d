"""Background execution of store mutations."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


@dataclass
class FailedOperation:
    """A submitted operation that raised."""

    label: str
    error: Exception
    failed_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "error": f"{type(self.error).__name__}: {self.error}",
            "failed_at": self.failed_at.isoformat(),
        }


class BackgroundRunner:
    """Runs submitted coroutines one at a time, in submission order.

    ``submit`` returns immediately. Results are discarded; failures are
    logged, kept in ``failures`` and passed to ``on_error``.
    """

    def __init__(
        self,
        on_error: Callable[[FailedOperation], None] | None = None,
        max_failures: int = 20,
    ):
        self.on_error = on_error
        self.failures: list[FailedOperation] = []
        self._max_failures = max_failures
        self._queue: asyncio.Queue | None = None
        self._worker: asyncio.Task | None = None
        self._closed = False

    @property
    def pending(self) -> int:
        """Number of submitted operations not yet finished."""
        if self._queue is None:
            return 0
        return self._queue.qsize()

    def submit(
        self, label: str, func: Callable[..., Awaitable[Any]], *args: Any
    ) -> None:
        """Queue ``func(*args)``. Must be called from a running event loop."""
        if self._closed:
            raise RuntimeError("BackgroundRunner is closed")

        self._ensure_worker()
        self._queue.put_nowait((label, func, args))

    async def join(self) -> None:
        """Wait until every submitted operation has finished."""
        if self._queue is not None:
            await self._queue.join()

    async def close(self, wait: bool = True) -> None:
        """Stop the worker, first draining the queue unless ``wait`` is False."""
        if wait and self._worker is not None and not self._worker.done():
            await self.join()

        self._closed = True
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None

    def _ensure_worker(self) -> None:
        if self._worker is not None and not self._worker.done():
            return

        loop = asyncio.get_running_loop()
        if self._queue is None:
            self._queue = asyncio.Queue()
        self._worker = loop.create_task(self._run(), name="gym-planner-runner")

    async def _run(self) -> None:
        while True:
            label, func, args = await self._queue.get()
            try:
                await func(*args)
            except Exception as e:
                logger.exception("Background operation %s failed", label)
                self._record_failure(FailedOperation(label=label, error=e))
            finally:
                self._queue.task_done()

    def _record_failure(self, failure: FailedOperation) -> None:
        self.failures.append(failure)
        if len(self.failures) > self._max_failures:
            del self.failures[: -self._max_failures]

        if self.on_error is not None:
            try:
                self.on_error(failure)
            except Exception:
                logger.exception("Error callback failed for %s", failure.label)
