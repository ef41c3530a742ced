"""Typer CLI entrypoint for redditor."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .config import ConfigLocator, FeedQuery, IdentityKey, RetryConfig, SortMode, WatchConfig, load_watch_config
from .engine import FeedFetcher, SeenSet, parse_listing
from .errors import RedditorError
from .logging_conf import configure_logging, tail_log
from .poller import Poller
from .ui import FeedPrinter

app = typer.Typer(
    help="Simple command line reddit browser that watches a subreddit for new posts.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()


@dataclass
class AppState:
    printer: FeedPrinter
    fetcher_factory: Callable[[RetryConfig], FeedFetcher]
    sleep: Callable[[float], None]
    logger: structlog.BoundLogger


def build_state(verbose: bool) -> AppState:
    logger = configure_logging(verbose=verbose).bind(component="cli")
    return AppState(
        printer=FeedPrinter(),
        fetcher_factory=lambda retry: FeedFetcher(retry),
        sleep=time.sleep,
        logger=logger,
    )


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _resolve_settings(
    config_path: Optional[Path],
    name: Optional[str],
    sort: Optional[SortMode],
    wait: Optional[int],
    retries: Optional[int],
    identity: Optional[IdentityKey],
    seen_limit: Optional[int],
) -> tuple[WatchConfig, FeedQuery]:
    """Merge defaults, the optional config file and explicit options, in that order."""

    try:
        base = load_watch_config(config_path)
        payload = base.model_dump()
        overrides = {
            "subreddit": name,
            "sort": sort,
            "interval": wait,
            "identity": identity,
            "seen_capacity": seen_limit,
        }
        payload.update({key: value for key, value in overrides.items() if value is not None})
        if retries is not None:
            payload["retry"] = {**payload["retry"], "attempts": retries}
        settings = WatchConfig.model_validate(payload)
    except (ValidationError, ValueError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not settings.subreddit:
        raise typer.BadParameter("Missing subreddit: pass --name or set `subreddit` in the config file.")
    try:
        query = settings.build_query()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return settings, query


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"redditor {__version__}", markup=False, highlight=False)
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging on stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit.",
        is_eager=True,
        callback=_version_callback,
    ),
) -> None:
    ctx.obj = build_state(verbose)


@app.command("watch", help="Poll a subreddit and print posts as they appear.")
def watch(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name of the subreddit to browse."),
    sort: Optional[SortMode] = typer.Option(
        None, "--sort", "-s", help="Sorting type for the subreddit [default: hot]."
    ),
    wait: Optional[int] = typer.Option(
        None, "--wait", "-w", help="Wait time in seconds between checks [default: 10]."
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML or JSON watch configuration."),
    retries: Optional[int] = typer.Option(
        None, "--retries", help="Retry a failed fetch this many times with backoff [default: 0]."
    ),
    identity: Optional[IdentityKey] = typer.Option(
        None, "--identity", help="Field deciding whether two posts are the same [default: title]."
    ),
    seen_limit: Optional[int] = typer.Option(
        None, "--seen-limit", help="Remember at most this many posts [default: unlimited]."
    ),
) -> None:
    state = _get_state(ctx)
    settings, query = _resolve_settings(config, name, sort, wait, retries, identity, seen_limit)
    fetcher = state.fetcher_factory(settings.retry)
    poller = Poller(
        query,
        settings.interval,
        fetcher,
        printer=state.printer,
        sleep=state.sleep,
        seen=SeenSet(settings.seen_capacity),
        identity=settings.identity,
    )
    state.logger.info(
        "watch_started",
        subreddit=query.subreddit,
        sort=query.sort.value,
        interval=settings.interval,
        retries=settings.retry.attempts,
    )
    try:
        poller.run()
    except RedditorError as exc:
        state.logger.error("watch_failed", error=str(exc), cycles=poller.cycles)
        state.printer.error(exc)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        state.logger.info("watch_interrupted", cycles=poller.cycles)
        raise typer.Exit(code=130)
    finally:
        fetcher.close()


@app.command("show", help="Print the current posts of a subreddit once.")
def show(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Name of the subreddit to browse."),
    sort: SortMode = typer.Option(SortMode.HOT, "--sort", "-s", help="Sorting type for the subreddit."),
) -> None:
    state = _get_state(ctx)
    try:
        query = FeedQuery(subreddit=name, sort=sort)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    fetcher = state.fetcher_factory(RetryConfig())
    try:
        items = parse_listing(fetcher(query))
    except RedditorError as exc:
        state.logger.error("show_failed", error=str(exc))
        state.printer.error(exc)
        raise typer.Exit(code=1)
    finally:
        fetcher.close()
    state.printer.header(query)
    for item in items:
        state.printer.item(item)


@app.command("log", help="Show the most recent log lines.")
def log_show(
    errors: bool = typer.Option(False, "--errors", help="Read error.log instead of redditor.log."),
    tail: int = typer.Option(100, "--tail", help="Number of lines to show."),
) -> None:
    logs_dir = ConfigLocator().logs_dir
    path = logs_dir / ("error.log" if errors else "redditor.log")
    lines = tail_log(path, tail)
    if not lines:
        console.print("No log entries yet.", style="dim")
        return
    console.print(f"{path.name} · last {len(lines)} lines", style="cyan")
    console.print("".join(lines), markup=False, highlight=False)


__all__ = ["AppState", "app", "build_state"]
