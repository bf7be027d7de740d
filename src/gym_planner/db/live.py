"""Live, push-updated views over the workout store.

The repository owns a ChangeNotifier. Writes hold the notifier's lock
while they commit and publish, and publishing runs every live feed's query
right then, so each feed receives the state as it was after each commit.
"""

import asyncio
import logging
import weakref
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Awaitable, Callable, Generic, TypeVar

import aiosqlite

from ..errors import SubscriptionClosedError
from ..models.workout import Workout

if TYPE_CHECKING:
    from .repositories import WorkoutRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class ChangeNotifier:
    """Fan-out of store commits to live subscriptions.

    Feeds are held weakly: one that is dropped without ``close()`` stops
    receiving snapshots once it is garbage collected.
    """

    def __init__(self):
        self.lock = asyncio.Lock()
        self._feeds: weakref.WeakSet = weakref.WeakSet()
        self._revision = 0

    @property
    def revision(self) -> int:
        """Number of commits published so far."""
        return self._revision

    @property
    def subscriber_count(self) -> int:
        return len(self._feeds)

    def subscribe(self, feed: "LiveQuery") -> None:
        self._feeds.add(feed)

    def unsubscribe(self, feed: "LiveQuery") -> None:
        self._feeds.discard(feed)

    async def publish(self) -> None:
        """Capture a snapshot for every started feed.

        Callers that write hold ``lock`` around the commit and this call.
        """
        self._revision += 1
        for feed in list(self._feeds):
            await feed._capture()


class _Failure:
    """A query error queued in place of a snapshot."""

    def __init__(self, error: Exception):
        self.error = error


class LiveQuery(Generic[T]):
    """A subscription yielding a snapshot taken after every commit.

    The first read returns the current state; every commit after that
    queues one snapshot. Use as an async iterator, optionally inside
    ``async with`` so the subscription is closed on exit:

        async with live.watch_all() as feed:
            async for workouts in feed:
                ...
    """

    def __init__(self, notifier: ChangeNotifier, query: Callable[[], Awaitable[T]]):
        self._notifier = notifier
        self._query = query
        self._queue: asyncio.Queue = asyncio.Queue()
        self._started = False
        self._closed = False
        notifier.subscribe(self)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Number of snapshots waiting to be read."""
        if self._closed:
            return 0
        return self._queue.qsize()

    def close(self) -> None:
        """Unsubscribe. Queued and future snapshots are no longer delivered."""
        if self._closed:
            return
        self._closed = True
        self._notifier.unsubscribe(self)
        logger.debug(
            "Live query closed, %d subscriber(s) left", self._notifier.subscriber_count
        )
        # Wake a reader blocked on the queue
        self._queue.put_nowait(_CLOSED)

    async def _capture(self) -> None:
        if not self._started or self._closed:
            return
        try:
            snapshot = await self._query()
        except Exception as e:
            # Delivered to the subscriber on its next read
            self._queue.put_nowait(_Failure(e))
        else:
            self._queue.put_nowait(snapshot)

    async def _initial(self) -> T:
        # Under the write lock, so no commit falls between this snapshot
        # and the first one queued by publish()
        async with self._notifier.lock:
            snapshot = await self._query()
            self._started = True
        return snapshot

    def __aiter__(self) -> "LiveQuery[T]":
        return self

    async def __anext__(self) -> T:
        if self._closed:
            raise StopAsyncIteration

        if not self._started:
            snapshot = await self._initial()
        else:
            snapshot = await self._queue.get()

        if snapshot is _CLOSED or self._closed:
            raise StopAsyncIteration
        if isinstance(snapshot, _Failure):
            raise snapshot.error
        return snapshot

    async def next(self, timeout: float | None = None) -> T:
        """Read the next snapshot, waiting at most ``timeout`` seconds.

        A timeout never drops a snapshot: it is read on the next call.
        """
        try:
            return await asyncio.wait_for(self.__anext__(), timeout)
        except StopAsyncIteration:
            raise SubscriptionClosedError("Subscription is closed") from None

    async def __aenter__(self) -> "LiveQuery[T]":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class ExternalCommitPoller:
    """Publishes commits made to the database file by other processes.

    Polls ``PRAGMA data_version`` on a dedicated connection. Commits made
    through repositories in this process move it too, so use it in sessions
    that only read, such as the watch command.
    """

    def __init__(self, db_path: Path, notifier: ChangeNotifier, interval: float = 0.5):
        self.db_path = db_path
        self.notifier = notifier
        self.interval = interval
        self._db: aiosqlite.Connection | None = None
        self._task: asyncio.Task | None = None
        self._version: int | None = None

    async def start(self) -> None:
        self._db = await aiosqlite.connect(self.db_path)
        self._version = await self._data_version()
        self._task = asyncio.create_task(self._run(), name="gym-planner-poller")

    async def close(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._db is not None:
            await self._db.close()
            self._db = None

    async def _data_version(self) -> int:
        cursor = await self._db.execute("PRAGMA data_version")
        row = await cursor.fetchone()
        return row[0]

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                version = await self._data_version()
            except aiosqlite.Error as e:
                logger.warning("Could not read data_version from %s: %s", self.db_path, e)
                continue
            if version == self._version:
                continue
            self._version = version
            logger.debug("External commit detected (data_version %s)", version)
            async with self.notifier.lock:
                await self.notifier.publish()

    async def __aenter__(self) -> "ExternalCommitPoller":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class WorkoutLiveQueries:
    """Live feeds over a WorkoutRepository."""

    def __init__(self, repository: "WorkoutRepository"):
        self.repository = repository

    def watch_all(self) -> LiveQuery[list[Workout]]:
        """Feed of all workouts, sorted by name."""
        return LiveQuery(self.repository.notifier, self.repository.list_all)

    def watch_by_id(self, workout_id: str) -> LiveQuery[Workout | None]:
        """Feed of a single workout, None while it does not exist."""
        return LiveQuery(
            self.repository.notifier,
            partial(self.repository.get_by_id, workout_id),
        )

    def poll_external_commits(self, interval: float = 0.5) -> ExternalCommitPoller:
        """Poller that also publishes commits made by other processes."""
        return ExternalCommitPoller(self.repository.db_path, self.repository.notifier, interval)
