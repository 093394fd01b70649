"""Tag synchronization engine.

Keeps the local tag state of a cache instance eventually consistent with
every other instance pointed at the same keeper. Each cycle:

1. Publish: every pending local invalidation is written to the keeper.
   A failed write is put back as pending unless a newer invalidation of
   the same tag was recorded meanwhile, so a slow failure never
   overwrites a later update. Successful writes leave pending.
2. Pull: the keeper's invalidations newer than a rolling watermark are
   merged into the local state, keeping the larger instant per tag.

Because entries are checked against invalidation instants at read time
(an entry is stale iff it was inserted at or before the instant), no
key ever has to be deleted: once a cycle has pulled an invalidation,
no entry written before it can be served by this instance again.

Example:
    engine = TagSyncEngine(keeper, TagState(), CacheConfig())
    engine.ensure_running()  # inside a running event loop
    ...
    await engine.stop(flush=True)
"""

import asyncio
import logging

from tagcache.core.entities.cache_config import CacheConfig
from tagcache.core.entities.tag_state import TagState
from tagcache.core.interfaces.keeper import IKeeper
from tagcache.utils.timing import Clock, now_ms

logger = logging.getLogger(__name__)


class TagSyncEngine:
    """Periodic publish/pull of tag invalidations against a keeper.

    Without a keeper the engine is inert: no task is started and cycles
    are no-ops.
    """

    def __init__(
        self,
        keeper: IKeeper | None,
        tag_state: TagState,
        config: CacheConfig,
        clock: Clock = now_ms,
        name: str = "",
    ) -> None:
        self._keeper = keeper
        self._state = tag_state
        self._config = config
        self._clock = clock
        self._name = name

        self._since = clock() - config.tag_max_expire_time
        self._in_flight = False
        self._closed = False
        self._task: asyncio.Task[None] | None = None
        self._flush_tasks: set[asyncio.Task[None]] = set()

    @property
    def enabled(self) -> bool:
        """True when a keeper is configured."""
        return self._keeper is not None

    @property
    def since(self) -> int:
        """Current pull watermark in epoch milliseconds."""
        return self._since

    @property
    def running(self) -> bool:
        """True while the periodic task is alive."""
        return self._task is not None and not self._task.done()

    @property
    def in_flight(self) -> bool:
        """True while a cycle is being executed."""
        return self._in_flight

    def ensure_running(self) -> None:
        """Start the periodic task if a keeper is set and a loop is running.

        Safe to call on every cache operation. A task left behind by a
        previous (closed) event loop is replaced.
        """
        if self._keeper is None or self._closed:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        if self._task is not None and not self._task.done() and self._task.get_loop() is loop:
            return

        self._task = loop.create_task(self._run(), name=f"tagcache-sync:{self._name}")
        logger.debug(
            "Started tag sync for %r every %d ms",
            self._name,
            self._config.tag_flush_interval,
        )

    async def _run(self) -> None:
        interval = self._config.tag_flush_interval / 1000
        while True:
            await asyncio.sleep(interval)
            try:
                await self.run_cycle()
            except Exception:
                logger.exception("Tag sync cycle for %r failed", self._name)

    async def run_cycle(self) -> bool:
        """Run one publish/pull cycle.

        Returns:
            True if the cycle ran, False if it was skipped because there is
            no keeper or another cycle is still in flight.
        """
        if self._keeper is None:
            return False
        if self._in_flight:
            logger.debug("Tag sync cycle for %r still in flight, skipping", self._name)
            return False

        self._in_flight = True
        try:
            await self._publish()
            await self._pull()
        finally:
            self._in_flight = False
        return True

    async def _publish(self) -> None:
        if self._keeper is None:
            return
        pending = self._state.take_pending()
        if not pending:
            return

        items = list(pending.items())
        try:
            results = await asyncio.gather(
                *(self._keeper.write(tag, instant) for tag, instant in items),
                return_exceptions=True,
            )
        except asyncio.CancelledError:
            for tag, instant in items:
                self._state.restore_pending(tag, instant)
            raise

        failed = 0
        for (tag, instant), result in zip(items, results):
            if isinstance(result, BaseException):
                failed += 1
                logger.debug("Publishing tag %r failed: %r", tag, result)
                self._state.restore_pending(tag, instant)

        if failed:
            logger.warning(
                "Failed to publish %d of %d tag updates for %r, will retry",
                failed,
                len(items),
                self._name,
            )

    async def _pull(self) -> None:
        if self._keeper is None:
            return
        now = self._clock()
        try:
            remote = await self._keeper.load(self._since)
            updates = {tag: int(instant) for tag, instant in (remote or {}).items()}
        except Exception as e:
            logger.warning("Failed to load tags for %r: %s", self._name, e)
            return

        newest = self._state.merge(updates)
        if newest is None:
            return

        # Trail the newest instant so updates published late by a peer
        # are still inside the next window.
        watermark = min(newest, now) - (self._config.tag_pull_overlap or 0)
        if watermark > self._since:
            self._since = watermark

    def schedule_flush(self, tag: str, instant: int) -> None:
        """Publish one tag update right away, in the background.

        Failures are ignored here; the update stays pending and the next
        cycle retries it.
        """
        if self._keeper is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, leaving %r to the next sync cycle", tag)
            return

        task = loop.create_task(self._flush_one(tag, instant))
        self._flush_tasks.add(task)
        task.add_done_callback(self._flush_tasks.discard)

    async def _flush_one(self, tag: str, instant: int) -> None:
        if self._keeper is None:
            return
        try:
            await self._keeper.write(tag, instant)
        except Exception as e:
            logger.debug("Immediate publish of tag %r failed: %s", tag, e)
            return
        self._state.confirm(tag, instant)

    async def stop(self, flush: bool = False) -> None:
        """Cancel the periodic task and any immediate publishes.

        Args:
            flush: Publish whatever is still pending before returning.
        """
        self._closed = True

        tasks = [t for t in (self._task, *self._flush_tasks) if t is not None]
        self._task = None
        loop = asyncio.get_running_loop()
        awaitable = []
        for task in tasks:
            if task.done() or task.get_loop().is_closed():
                continue
            task.cancel()
            if task.get_loop() is loop:
                awaitable.append(task)
        if awaitable:
            await asyncio.gather(*awaitable, return_exceptions=True)

        if flush and self._keeper is not None:
            await self._publish()
