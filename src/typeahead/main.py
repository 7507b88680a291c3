import asyncio
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv

from typeahead.application import Typeahead, TypeaheadConfig
from typeahead.domain.errors import ConfigurationError
from typeahead.infrastructure import HttpCandidateSource, load_candidates
from typeahead.logger import get_logger, setup_logger

load_dotenv()

cli = typer.Typer(
    name="typeahead",
    help="Type-ahead lookups against a local JSON collection or a remote search endpoint",
    epilog="""
    Examples:
    $ typeahead lookup ap --items fruits.json --display-item item.name
    $ typeahead demo --url https://example.org/search --items-path results --prefetch
    """,
    add_completion=False,
)


def build_source(items: Optional[Path], url: Optional[str], items_path: Optional[str]) -> Any:
    """Local collection from ``--items`` or an HTTP fetcher from ``--url`` (exactly one)."""
    if (items is None) == (url is None):
        raise typer.BadParameter("Pass exactly one of --items or --url")
    if items is not None:
        return load_candidates(items, items_path=items_path)
    return HttpCandidateSource(url, items_path=items_path)


def build_config(source: Any, **options: Any) -> TypeaheadConfig:
    """Environment (``TYPEAHEAD_*``) first, explicit CLI options on top."""
    overrides = {key: value for key, value in options.items() if value is not None}
    if (
        "display_item" not in overrides
        and isinstance(source, list)
        and source
        and all(isinstance(item, str) for item in source)
    ):
        overrides["display_item_fn"] = str
    return TypeaheadConfig.from_env(**overrides)


async def run_lookup(config: TypeaheadConfig, source: Any, query: str) -> Typeahead:
    """Drive a headless control through prefetch and one typed query."""
    control = Typeahead(config, source=source)
    prefetch = control.start()
    if prefetch is not None:
        await prefetch
    control.input.value = query
    control.on_input()
    await control.wait_idle()
    return control


def _setup_logging(debug: bool, log_file: Optional[str]) -> None:
    setup_logger(log_file=log_file, log_level="DEBUG" if debug else "INFO")


@cli.command()
def lookup(
    query: str = typer.Argument(..., help="Text typed into the field"),
    items: Optional[Path] = typer.Option(None, "--items", help="JSON file with the local candidate collection"),
    url: Optional[str] = typer.Option(None, "--url", help="Remote search endpoint"),
    items_path: Optional[str] = typer.Option(None, "--items-path", help="JMESPath expression selecting the candidate list"),
    display_item: Optional[str] = typer.Option(None, "--display-item", help="Display path (JMESPath), e.g. item.name"),
    min_chars: Optional[int] = typer.Option(None, "--min-chars", help="Minimum query length"),
    prefetch: Optional[bool] = typer.Option(None, "--prefetch/--no-prefetch", help="Fetch everything once, filter locally"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
):
    """Print the candidates the control would offer for QUERY."""
    _setup_logging(debug, log_file)
    logger = get_logger("main")

    try:
        source = build_source(items, url, items_path)
        config = build_config(source, display_item=display_item, min_chars=min_chars, do_prefetch=prefetch)
        control = asyncio.run(run_lookup(config, source, query))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    state = control.state
    if state.last_error is not None:
        typer.echo(f"Error: {state.last_error}", err=True)
        raise typer.Exit(code=1)
    if state.no_suggestions:
        typer.echo("No suggestions")
        return
    for candidate in state.candidates or []:
        typer.echo(control.option_label(candidate))


@cli.command()
def demo(
    items: Optional[Path] = typer.Option(None, "--items", help="JSON file with the local candidate collection"),
    url: Optional[str] = typer.Option(None, "--url", help="Remote search endpoint"),
    items_path: Optional[str] = typer.Option(None, "--items-path", help="JMESPath expression selecting the candidate list"),
    display_item: Optional[str] = typer.Option(None, "--display-item", help="Display path (JMESPath), e.g. item.name"),
    min_chars: Optional[int] = typer.Option(None, "--min-chars", help="Minimum query length"),
    prefetch: Optional[bool] = typer.Option(None, "--prefetch/--no-prefetch", help="Fetch everything once, filter locally"),
    clear_after_search: Optional[bool] = typer.Option(None, "--clear-after-search", help="Clear the field after a selection"),
    search_button: Optional[bool] = typer.Option(None, "--search-button", help="Show a search button"),
    can_create_new: Optional[bool] = typer.Option(None, "--create-new", help="Offer 'Add new' when nothing matches"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
):
    """Open an interactive Textual playground."""
    _setup_logging(debug, log_file)
    logger = get_logger("main")

    from typeahead.presentation import TypeaheadDemoApp

    try:
        source = build_source(items, url, items_path)
        config = build_config(
            source,
            display_item=display_item,
            min_chars=min_chars,
            do_prefetch=prefetch,
            clear_after_search=clear_after_search,
            has_search_button=search_button,
            has_progress_bar=True,
            can_create_new=can_create_new,
            focus_on=True,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    logger.info("Starting typeahead demo")
    TypeaheadDemoApp(config, source).run()


def run():
    cli()


if __name__ == "__main__":
    run()
