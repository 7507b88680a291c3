"""
Query coordination: gating, dispatch and reconciliation of candidate lookups.

The coordinator owns the ``QueryState`` and two dispatch paths:

- the remote path (``fetch``), which schedules one asyncio task per
  qualifying dispatch and applies each completion when it arrives
- the local path (``filter_stored_items``), which filters the stored
  collection synchronously

Remote fetches are never cancelled by newer ones. By default completions are
applied in arrival order, so a slow stale request can overwrite a newer
result. With ``supersede_stale_results`` each dispatch takes a sequence
number and only the latest dispatch may write the candidate list.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sized
from typing import Any, Optional

from typeahead.application.config import TypeaheadConfig
from typeahead.application.display import DisplayResolver
from typeahead.application.source_resolver import resolve_source
from typeahead.domain.errors import FetchError, MissingDisplayStrategyError, MissingSourceError
from typeahead.domain.events import CandidatesUpdated, EventBus, FetchFailed
from typeahead.domain.protocols import CandidateFetcher, InputTarget
from typeahead.domain.types import CandidateSource, LocalSource, QueryState, RemoteSource, ValueKind
from typeahead.logger import get_logger

logger = get_logger("coordinator")


def _is_empty_result(raw: Any) -> bool:
    return isinstance(raw, Sized) and len(raw) == 0


class _Ticket:
    """One outstanding request; released exactly once."""

    __slots__ = ("seq", "settled")

    def __init__(self, seq: int) -> None:
        self.seq = seq
        self.settled = False


class QueryCoordinator:
    """Decides when and where candidates are looked up and tracks the results."""

    def __init__(
        self,
        config: TypeaheadConfig,
        display: DisplayResolver,
        input_target: InputTarget,
        event_bus: EventBus,
    ) -> None:
        self.config = config
        self.display = display
        self.input = input_target
        self.event_bus = event_bus
        self.state = QueryState()

        self._fetcher: Optional[CandidateFetcher] = None
        self._stored_items: Optional[list[Any]] = None
        self._observed_kind: Optional[ValueKind] = None

        self._dispatch_seq = 0
        self._tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------ #
    # Source
    # ------------------------------------------------------------------ #
    def set_source(self, value: Any) -> CandidateSource:
        """Replace the active candidate source. Never dispatches."""
        source = resolve_source(value)
        if isinstance(source, RemoteSource):
            self._fetcher = source.fetcher
            self._stored_items = None
            logger.info(f"Remote source configured ({type(source.fetcher).__name__})")
        else:
            self._fetcher = None
            self._stored_items = list(source.items)
            self.record_kind(self._stored_items)
            logger.info(f"Local source configured with {len(self._stored_items)} candidates")
        return source

    @property
    def source(self) -> Optional[CandidateSource]:
        if self._fetcher is not None:
            return RemoteSource(fetcher=self._fetcher)
        if self._stored_items is not None:
            return LocalSource(items=list(self._stored_items))
        return None

    @property
    def stored_items(self) -> Optional[list[Any]]:
        """Local collection (a local source, or the result of a prefetch)."""
        return self._stored_items

    @property
    def observed_kind(self) -> Optional[ValueKind]:
        return self._observed_kind

    def record_kind(self, items: Optional[list[Any]]) -> None:
        """Remember the kind of the first candidate of a non-empty list."""
        if items:
            self._observed_kind = ValueKind.of(items[0])

    @property
    def search_via_service(self) -> bool:
        """Remote path iff a fetcher is configured and prefetch was not requested."""
        return self._fetcher is not None and not self.config.do_prefetch

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #
    def dispatch(self, force: bool = False) -> Optional[asyncio.Task]:
        """Run the path-selected dispatch. ``force`` only affects the remote path."""
        if self.search_via_service:
            return self.fetch(force=force)
        self.filter_stored_items()
        return None

    def fetch(self, force: bool = False) -> Optional[asyncio.Task]:
        """
        Dispatch a remote lookup for the current input text.

        Args:
            force: Dispatch even when the query is shorter than ``min_chars``

        Returns:
            The scheduled fetch task, or None when nothing was dispatched

        Raises:
            MissingSourceError: If no remote fetcher is configured
        """
        if self._fetcher is None:
            raise MissingSourceError("No remote source is configured for fetch; set source to a candidate fetcher")

        query = self.input.value
        self.state.query = query

        # empty query is not allowed for remote lookups
        if not query:
            self.state.candidates = []
            return None

        if not force and len(query) < self.config.min_chars:
            logger.debug(f"Query {query!r} below min_chars={self.config.min_chars}, not dispatched")
            return None

        params = dict(self.config.service_params or {})
        params["query"] = query

        self.state.no_suggestions = False
        self._dispatch_seq += 1
        ticket = self._acquire(self._dispatch_seq)
        logger.debug(
            f"Dispatching fetch #{ticket.seq} query={query!r} "
            f"outstanding={self.state.outstanding_requests}"
        )
        return self._spawn(self._complete_fetch(self._fetcher, ticket, query, params), ticket)

    def prefetch(self) -> asyncio.Task:
        """
        Retrieve the full candidate universe once and store it locally.

        Raises:
            MissingSourceError: If no remote fetcher is configured
        """
        if self._fetcher is None:
            raise MissingSourceError("No remote source is configured for prefetch; set source to a candidate fetcher")

        # no collection until the prefetch completes
        self._stored_items = None
        self.state.no_suggestions = False
        ticket = self._acquire(0)
        params = dict(self.config.service_params or {})
        logger.info(f"Prefetching candidates with params={params!r}")
        return self._spawn(self._complete_prefetch(self._fetcher, ticket, params), ticket)

    def filter_stored_items(self) -> None:
        """
        Filter the local collection by case-insensitive substring match.

        Raises:
            MissingDisplayStrategyError: If neither ``display_item`` nor
                ``display_item_fn`` is configured
            DisplayResolutionError: If a candidate cannot be displayed
        """
        if not self.display.can_filter:
            raise MissingDisplayStrategyError("Local search needs display_item or display_item_fn")

        query = self.input.value
        self.state.query = query
        if len(query) < self.config.min_chars:
            return

        if self._stored_items is None:
            candidates: list[Any] = []
            self.state.no_suggestions = False
        else:
            needle = query.lower()
            candidates = [item for item in self._stored_items if needle in self.display.filter_text(item)]
            self.state.no_suggestions = len(query) > 0 and not candidates

        self.state.candidates = candidates
        logger.debug(f"Filtered {len(candidates)} local candidates for query={query!r}")
        self.event_bus.publish(
            CandidatesUpdated(query=query, candidates=candidates, no_suggestions=self.state.no_suggestions)
        )

    # ------------------------------------------------------------------ #
    # Completion
    # ------------------------------------------------------------------ #
    async def _complete_fetch(
        self, fetcher: CandidateFetcher, ticket: _Ticket, query: str, params: Mapping[str, Any]
    ) -> None:
        try:
            raw = await fetcher.fetch(params)
            candidates = list(self.config.filter_callback(raw))
        except Exception as e:
            self._release(ticket)
            self._record_failure(query, e)
            return
        self._release(ticket)

        if self.config.supersede_stale_results and ticket.seq != self._dispatch_seq:
            logger.debug(f"Discarding stale result of fetch #{ticket.seq} (latest is #{self._dispatch_seq})")
            return

        self.state.candidates = candidates
        self.state.no_suggestions = _is_empty_result(raw)
        self.state.last_error = None
        self.record_kind(candidates)
        logger.debug(f"Fetch #{ticket.seq} for {query!r} completed with {len(candidates)} candidates")
        self.event_bus.publish(
            CandidatesUpdated(query=query, candidates=candidates, no_suggestions=self.state.no_suggestions)
        )

    async def _complete_prefetch(
        self, fetcher: CandidateFetcher, ticket: _Ticket, params: Mapping[str, Any]
    ) -> None:
        try:
            raw = await fetcher.fetch(params)
            items = list(self.config.filter_callback(raw))
        except Exception as e:
            self._release(ticket)
            self._record_failure(None, e)
            return
        self._release(ticket)

        self._stored_items = items
        self.state.no_suggestions = _is_empty_result(raw)
        self.state.last_error = None
        self.record_kind(self._stored_items)
        logger.info(f"Prefetch stored {len(self._stored_items)} candidates")

    def _record_failure(self, query: Optional[str], error: Exception) -> None:
        label = "prefetch" if query is None else f"query {query!r}"
        failure = FetchError(f"Fetch failed for {label}: {error}", query=query)
        failure.__cause__ = error
        self.state.last_error = failure
        logger.warning(f"Fetch failed for {label}: {error}")
        self.event_bus.publish(FetchFailed(query=query, error=error))

    # ------------------------------------------------------------------ #
    # Request bookkeeping
    # ------------------------------------------------------------------ #
    def _acquire(self, seq: int) -> _Ticket:
        self.state.outstanding_requests += 1
        return _Ticket(seq)

    def _release(self, ticket: _Ticket) -> None:
        if ticket.settled:
            return
        ticket.settled = True
        self.state.outstanding_requests -= 1

    def _spawn(self, coro, ticket: _Ticket) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)

        def _done(finished: asyncio.Task) -> None:
            self._tasks.discard(finished)
            # cancelled tasks may never have reached their own release
            self._release(ticket)

        task.add_done_callback(_done)
        return task

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait until every dispatched fetch has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel in-flight fetches. Their requests are released as the tasks finish."""
        if self._tasks:
            logger.debug(f"Cancelling {len(self._tasks)} in-flight fetch task(s)")
        for task in list(self._tasks):
            task.cancel()
