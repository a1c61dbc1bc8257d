"""CLI interface: interactive template search with /more /clear /builder /quit."""

import asyncio

from template_search.core.config import config
from template_search.core.logger import logger
from template_search.interfaces.console import Colors, ConsoleDisplay, colorize
from template_search.orchestrators.search.backends.catalog_http import HttpCatalogClient
from template_search.orchestrators.search.coordinator import SearchCoordinator, SearchHandle
from template_search.orchestrators.search.models import QueryContext
from template_search.orchestrators.search.session import SearchSession


def print_help():
    help_text = """
    ╭──────────────────────────────────────────────╮
    │  Commands                                    │
    ├──────────────────────────────────────────────┤
    │  <keywords>       - Search, comma separated  │
    │  /more            - Load the next page       │
    │  /clear           - Back to default keyword  │
    │  /builder <name>  - Switch page builder      │
    │  /help            - Show this help           │
    │  /quit            - Exit                     │
    ╰──────────────────────────────────────────────╯
    """
    print(colorize(help_text, Colors.CYAN))


async def _show(handle: SearchHandle | None, display: ConsoleDisplay) -> None:
    if handle is None:
        print(colorize("  Nothing to do.", Colors.DIM))
        return
    outcome = await handle.wait()
    print(display.render())
    if outcome.failed_keywords:
        print(colorize(f"  No results for: {', '.join(outcome.failed_keywords)}", Colors.YELLOW))


async def _more(session: SearchSession, display: ConsoleDisplay) -> None:
    if session.coordinator.pagination_state.is_loading_page:
        print(colorize("  Still loading the next page, try again in a moment.", Colors.DIM))
        return
    if await session.load_more():
        print(display.render())
    elif session.coordinator.pagination_state.has_more_pages:
        print(colorize("  Could not load more templates, try /more again.", Colors.YELLOW))
    else:
        print(colorize("  No more templates.", Colors.DIM))


async def run_cli():
    errors = config.validate()
    if errors:
        for error in errors:
            print(colorize(f"  Error: {error}", Colors.RED))
        return

    display = ConsoleDisplay()
    coordinator = SearchCoordinator(HttpCatalogClient(), display, display)
    session = SearchSession(
        coordinator,
        QueryContext(
            business_name=config.business_name,
            business_type=config.business_type,
            page_builder=config.page_builder,
        ),
    )
    print(colorize("  Template search. Type /help for commands\n", Colors.DIM))
    try:
        await _show(session.start(), display)
        while True:
            try:
                user_input = await asyncio.to_thread(
                    input, colorize("\n❯ ", Colors.GREEN, Colors.BOLD)
                )
            except EOFError:
                break
            command = user_input.strip()
            if not command:
                continue
            lowered = command.lower()

            if lowered == "/help":
                print_help()
                continue

            if lowered in ("/quit", "/exit", "/q"):
                break

            try:
                if lowered == "/more":
                    await _more(session, display)
                elif lowered == "/clear":
                    await _show(session.clear_keyword(), display)
                elif lowered.startswith("/builder"):
                    builder = command[len("/builder"):].strip()
                    await _show(session.change_page_builder(builder), display)
                else:
                    await _show(session.change_keyword(command), display)
            except Exception as e:
                logger.error(f"Error during search: {e}", exc_info=True)
                print(colorize(f"\n  Error: {e}", Colors.RED))
    except KeyboardInterrupt:
        pass
    finally:
        await coordinator.aclose()


def main():
    try:
        asyncio.run(run_cli())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
