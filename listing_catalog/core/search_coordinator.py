import asyncio
from typing import Callable, Dict, List, Optional, Set
from pydantic import BaseModel, Field
from listing_catalog.core.filter_engine import AvailabilityFilter, FilterEngine, count_by_availability
from listing_catalog.data.base_source import BaseListingSource, Listing
from listing_catalog.data.errors import ListingFetchError
import structlog

logger = structlog.get_logger()

DEFAULT_DEBOUNCE_SECONDS = 0.6


class SearchState(BaseModel):
    term: str = ""
    results: List[Listing] = Field(default_factory=list)
    is_initial_loading: bool = True
    is_searching: bool = False


class SearchCoordinator:
    """
    Turns search-box keystrokes into debounced catalog fetches.

    The term is applied immediately, the fetch fires once the input has
    been quiet for ``debounce_seconds``. Every dispatched fetch carries a
    sequence number and only the most recently dispatched one may replace
    the results, so a slow early response can never overwrite a newer one.
    Failed fetches are logged and the previous results stay on screen.

    Must be driven from inside a running asyncio loop.
    """

    def __init__(
        self,
        source: BaseListingSource,
        credential: Optional[str] = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        availability: AvailabilityFilter = AvailabilityFilter.ALL,
    ):
        self.source = source
        self.credential = credential
        self.debounce_seconds = debounce_seconds
        self.filter_engine = FilterEngine()
        self._availability = AvailabilityFilter.parse(availability)
        self._state = SearchState()
        self._dispatched_seq = 0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: List[Callable[["SearchCoordinator"], None]] = []
        self._started = False
        self._closed = False

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()

    # Read side

    @property
    def term(self) -> str:
        return self._state.term

    @property
    def all_records(self) -> List[Listing]:
        return list(self._state.results)

    @property
    def records(self) -> List[Listing]:
        return self.filter_engine.apply(self._state.results, self._availability)

    @property
    def is_initial_loading(self) -> bool:
        return self._state.is_initial_loading

    @property
    def is_searching(self) -> bool:
        return self._state.is_searching

    @property
    def availability_filter(self) -> AvailabilityFilter:
        return self._availability

    @property
    def counts(self) -> Dict[AvailabilityFilter, int]:
        return count_by_availability(self._state.results)

    @property
    def state(self) -> SearchState:
        return self._state.model_copy(update={"results": list(self._state.results)})

    @property
    def is_idle(self) -> bool:
        return self._timer is None and all(t.done() for t in self._tasks)

    # Write side

    def start(self):
        if self._started or self._closed:
            return
        self._started = True
        logger.info("search_coordinator_started", authenticated=bool(self.credential))
        self._dispatch()

    def set_search_term(self, term: str):
        if self._closed:
            return
        self._state.term = term if isinstance(term, str) else ""
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce_seconds, self._on_quiet_period_elapsed)
        self._notify()

    def set_availability_filter(self, mode):
        self._availability = AvailabilityFilter.parse(mode)
        self._notify()

    def set_credential(self, credential: Optional[str]):
        if credential == self.credential:
            return
        self.credential = credential
        logger.info("search_credential_changed", authenticated=bool(credential))
        self.refresh()

    def refresh(self):
        if self._closed:
            return
        self._cancel_timer()
        self._dispatch()

    def subscribe(self, callback: Callable[["SearchCoordinator"], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def wait_idle(self):
        loop = asyncio.get_running_loop()
        while not self.is_idle:
            pending = {t for t in self._tasks if not t.done()}
            if pending:
                await asyncio.wait(pending)
            elif self._timer is not None:
                await asyncio.sleep(max(0.0, self._timer.when() - loop.time()))

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._cancel_timer()
        self._listeners.clear()
        logger.info("search_coordinator_closed", pending_fetches=len(self._tasks))

    # Internals

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_quiet_period_elapsed(self):
        self._timer = None
        self._dispatch()

    def _dispatch(self):
        self._dispatched_seq += 1
        seq = self._dispatched_seq
        term = self._state.term
        self._state.is_searching = True
        logger.debug("search_dispatched", seq=seq, term=term)

        task = asyncio.get_running_loop().create_task(self._run_fetch(seq, term, self.credential))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._notify()

    async def _run_fetch(self, seq: int, term: str, credential: Optional[str]):
        try:
            records = await self.source.fetch(term, credential)
        except ListingFetchError as e:
            logger.error("listing_fetch_failed", seq=seq, term=term, error_type=type(e).__name__, error=str(e))
            self._resolve(seq, term, None)
        except Exception as e:
            logger.error("listing_fetch_crashed", seq=seq, term=term, error_type=type(e).__name__, error=str(e))
            self._resolve(seq, term, None)
        else:
            self._resolve(seq, term, records)

    def _resolve(self, seq: int, term: str, records: Optional[List[Listing]]):
        if self._closed:
            logger.debug("search_result_after_close_ignored", seq=seq)
            return

        # Cleared by whichever fetch completes first, superseded or not
        self._state.is_initial_loading = False

        if seq != self._dispatched_seq:
            logger.info("stale_search_result_discarded", seq=seq, latest_seq=self._dispatched_seq, term=term)
            self._notify()
            return

        self._state.is_searching = False
        if records is not None:
            self._state.results = list(records)
            logger.info("search_results_applied", seq=seq, term=term, count=len(records))
        self._notify()

    def _notify(self):
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception as e:
                logger.error("search_listener_failed", error=str(e))
