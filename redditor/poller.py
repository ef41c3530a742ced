"""Polling loop that reports listing items not seen before."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .config import FeedQuery, IdentityKey
from .engine import Item, SeenSet, parse_listing
from .logging_conf import configure_logging
from .ui import FeedPrinter

Fetch = Callable[[FeedQuery], Any]


class PollState(str, Enum):
    """The first cycle seeds the seen-set; every later cycle suppresses."""

    SEEDING = "seeding"
    STEADY = "steady"


@dataclass(slots=True)
class CycleResult:
    cycle: int
    state: PollState
    emitted: list[Item] = field(default_factory=list)
    found_new: bool = False


class Poller:
    """Fetch, diff against the seen-set, print, sleep, repeat.

    Exactly one cycle runs at a time and the seen-set is only touched from
    ``run_cycle``. Fetch and field errors are not caught here.
    """

    def __init__(
        self,
        query: FeedQuery,
        interval: int,
        fetch: Fetch,
        *,
        printer: FeedPrinter | None = None,
        sleep: Callable[[float], None] = time.sleep,
        seen: SeenSet | None = None,
        identity: IdentityKey = IdentityKey.TITLE,
    ) -> None:
        self.query = query
        self.interval = interval
        self.fetch = fetch
        self.printer = printer or FeedPrinter()
        self.sleep = sleep
        self.seen = seen if seen is not None else SeenSet()
        self.identity = identity
        self.state = PollState.SEEDING
        self.cycles = 0
        self.logger = configure_logging().bind(
            component="poller", subreddit=query.subreddit, sort=query.sort.value
        )

    def run(self, max_cycles: int | None = None) -> None:
        """Poll until cancelled, or for ``max_cycles`` cycles when given.

        The pause only happens between cycles, so a bounded run returns
        right after its last cycle.
        """

        self.printer.header(self.query)
        self.logger.info("polling_started", interval=self.interval)
        while True:
            self.run_cycle()
            if max_cycles is not None and self.cycles >= max_cycles:
                return
            self.sleep(self.interval)

    def run_cycle(self) -> CycleResult:
        snapshot = parse_listing(self.fetch(self.query))
        self.cycles += 1
        result = CycleResult(cycle=self.cycles, state=self.state)
        seeding = self.state is PollState.SEEDING

        for item in snapshot:
            key = item.identity(self.identity)
            if key in self.seen and not seeding:
                self.seen.touch(key)
                continue
            if not seeding:
                result.found_new = True
            self.printer.item(item)
            result.emitted.append(item)
            self.seen.add(key)

        if seeding:
            self.printer.banner(self.interval)
        else:
            self.printer.status(result.found_new, self.interval)
        self.state = PollState.STEADY

        self.logger.info(
            "cycle_completed",
            cycle=result.cycle,
            state=result.state.value,
            fetched=len(snapshot),
            emitted=len(result.emitted),
            seen=len(self.seen),
        )
        return result


__all__ = ["CycleResult", "Fetch", "PollState", "Poller"]
