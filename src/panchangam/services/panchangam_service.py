"""
panchangam_service.py - Fetch orchestration for the daily almanac.

- Remote fetch with total timeout, falling back to the offline synthesizer
- Debounced date navigation, immediate location changes
- Monotonic request sequence; results of superseded requests are dropped
- Immutable state snapshots pushed to per-subscriber asyncio.Queue
  (drop-oldest on backpressure)

State is only replaced from the event loop that owns the service, so
observers always see a complete snapshot.
"""

from __future__ import annotations

import asyncio

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Protocol

from ..core.config import ServiceConfig
from ..core.logging import get_service_logger
from ..models.day import PanchangamDay
from ..models.location import DEFAULT_LOCATION, Location
from ..modules.panchanga.fallback import synthesize_day
from .errors import PanchangamAPIError, TimedOutError
from .metrics import record_load, record_remote_error

logger = get_service_logger("orchestrator")

Synthesizer = Callable[[date, Location], PanchangamDay]
Clock = Callable[[], date]

FALLBACK_FAILED_MESSAGE = "Unable to load Panchangam data"


class DayFetcher(Protocol):
    async def fetch_daily_model(self, day: date, location: Location) -> PanchangamDay: ...


class LoadPhase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Provenance(Enum):
    """Where the displayed day came from"""

    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class PanchangamState:
    """Snapshot of the orchestrator.

    ``error`` is the user-facing message and is only set in FAILED.
    ``remote_error`` keeps the code of the last remote failure even when
    fallback data is being shown.
    """

    phase: LoadPhase
    selected_date: date
    location: Location
    day: PanchangamDay | None = None
    provenance: Provenance | None = None
    error: str | None = None
    remote_error: str | None = None
    request_seq: int = 0

    @property
    def is_loading(self) -> bool:
        return self.phase is LoadPhase.LOADING

    @property
    def is_using_fallback(self) -> bool:
        return self.provenance is Provenance.FALLBACK

    @property
    def has_data(self) -> bool:
        return self.day is not None

    @property
    def has_error(self) -> bool:
        return self.error is not None


class PanchangamService:
    """Owns the selected date/location and the day record shown for them."""

    def __init__(
        self,
        client: DayFetcher,
        *,
        config: ServiceConfig | None = None,
        synthesizer: Synthesizer = synthesize_day,
        clock: Clock = date.today,
        location: Location = DEFAULT_LOCATION,
        selected_date: date | None = None,
    ) -> None:
        self.client = client
        self.config = config or ServiceConfig()
        self.synthesizer = synthesizer
        self.clock = clock
        self._state = PanchangamState(
            phase=LoadPhase.IDLE,
            selected_date=selected_date or clock(),
            location=location,
        )
        self._seq = 0
        self._subscribers: list[asyncio.Queue[PanchangamState]] = []
        self._debounce_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    # -------------------- Observation -------------------------

    @property
    def state(self) -> PanchangamState:
        return self._state

    @property
    def day(self) -> PanchangamDay | None:
        return self._state.day

    def subscribe(self, maxsize: int | None = None) -> asyncio.Queue[PanchangamState]:
        """New queue of state snapshots, primed with the current one."""
        queue: asyncio.Queue[PanchangamState] = asyncio.Queue(
            maxsize=maxsize or self.config.queue_size
        )
        queue.put_nowait(self._state)
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[PanchangamState]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def _set_state(self, state: PanchangamState) -> None:
        self._state = state
        for queue in self._subscribers:
            if queue.full():
                # Drop oldest
                queue.get_nowait()
            queue.put_nowait(state)

    # -------------------- Triggers ----------------------------

    async def start(self) -> None:
        """Initial load for the current date and location."""
        await self._load(self._state.selected_date, self._state.location)

    async def refresh(self) -> None:
        self._cancel_debounce()
        await self._load(self._state.selected_date, self._state.location)

    async def retry(self) -> None:
        """Repeat the load for the current selection (from READY or FAILED)."""
        await self.refresh()

    def select_date(self, day: date) -> None:
        """Select a date; the fetch runs once selection settles."""
        self._supersede()
        self._set_state(replace(self._state, selected_date=day))
        self._cancel_debounce()
        self._debounce_task = asyncio.create_task(self._debounced_load())

    def next_day(self) -> None:
        self.select_date(self._state.selected_date + timedelta(days=1))

    def previous_day(self) -> None:
        self.select_date(self._state.selected_date - timedelta(days=1))

    def go_to_today(self) -> None:
        self.select_date(self.clock())

    def update_location(self, location: Location) -> None:
        """Switch location and load immediately, absorbing any pending date change."""
        self._supersede()
        self._cancel_debounce()
        self._set_state(replace(self._state, location=location))
        self._spawn_load()

    async def settle(self) -> None:
        """Wait until no debounce or load is pending."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if self._debounce_task is not None and not self._debounce_task.done():
                pending.append(self._debounce_task)
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        self._cancel_debounce()
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._subscribers.clear()

    # -------------------- Internals ---------------------------

    def _supersede(self) -> None:
        # Loads still in flight for the previous selection must not land
        self._seq += 1

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    async def _debounced_load(self) -> None:
        await asyncio.sleep(self.config.date_debounce_seconds)
        self._spawn_load()

    def _spawn_load(self) -> None:
        task = asyncio.create_task(self._load(self._state.selected_date, self._state.location))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_current(self, seq: int) -> bool:
        if seq == self._seq:
            return True
        logger.debug(f"Discarding result of superseded request {seq} (latest {self._seq})")
        record_load("superseded")
        return False

    async def _fetch(self, day: date, location: Location) -> PanchangamDay:
        total = self.config.total_timeout_seconds
        if total is None:
            return await self.client.fetch_daily_model(day, location)
        try:
            return await asyncio.wait_for(self.client.fetch_daily_model(day, location), total)
        except TimeoutError as e:
            raise TimedOutError(f"No response within {total}s") from e

    async def _load(self, day: date, location: Location) -> None:
        self._seq += 1
        seq = self._seq
        self._set_state(
            replace(
                self._state,
                phase=LoadPhase.LOADING,
                selected_date=day,
                location=location,
                error=None,
                request_seq=seq,
            )
        )

        try:
            result = await self._fetch(day, location)
        except PanchangamAPIError as e:
            if not self._is_current(seq):
                return
            record_remote_error(e.code)
            logger.warning(f"Remote fetch for {day.isoformat()} failed ({e.code}): {e}")
            await self._fall_back(seq, day, location, e)
            return
        except Exception as e:
            if not self._is_current(seq):
                return
            logger.exception(f"Unexpected error loading {day.isoformat()}")
            record_load("failed")
            self._set_state(
                replace(
                    self._state,
                    phase=LoadPhase.FAILED,
                    error=f"{FALLBACK_FAILED_MESSAGE}: {e}",
                    remote_error=type(e).__name__,
                )
            )
            return

        if not self._is_current(seq):
            return
        record_load("remote")
        self._set_state(
            replace(
                self._state,
                phase=LoadPhase.READY,
                day=result,
                provenance=Provenance.REMOTE,
                error=None,
                remote_error=None,
            )
        )

    async def _fall_back(
        self, seq: int, day: date, location: Location, cause: PanchangamAPIError
    ) -> None:
        if not self.config.fallback_enabled:
            record_load("failed")
            self._set_state(
                replace(
                    self._state,
                    phase=LoadPhase.FAILED,
                    error=cause.user_message,
                    remote_error=cause.code,
                )
            )
            return

        await asyncio.sleep(self.config.fallback_delay_seconds)
        if not self._is_current(seq):
            return

        try:
            synthesized = self.synthesizer(day, location)
        except Exception:
            logger.exception(f"Fallback synthesis failed for {day.isoformat()}")
            record_load("failed")
            self._set_state(
                replace(
                    self._state,
                    phase=LoadPhase.FAILED,
                    error=FALLBACK_FAILED_MESSAGE,
                    remote_error=cause.code,
                )
            )
            return

        logger.info(f"Showing fallback data for {day.isoformat()} ({cause.code})")
        record_load("fallback")
        self._set_state(
            replace(
                self._state,
                phase=LoadPhase.READY,
                day=synthesized,
                provenance=Provenance.FALLBACK,
                error=None,
                remote_error=cause.code,
            )
        )
