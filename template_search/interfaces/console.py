"""Terminal display and notifier for the CLI and one-shot interfaces."""

import shutil

from template_search.contracts.catalog_v1 import Design
from template_search.orchestrators.search.interface import DisplaySink, Notifier
from template_search.orchestrators.search.merger import DisplayEntry
from template_search.orchestrators.search.models import PaginationState


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    MAGENTA = "\033[35m"


def colorize(text: str, *colors: str) -> str:
    color_codes = "".join(colors)
    return f"{color_codes}{text}{Colors.RESET}"


def _design_label(design: Design) -> str:
    extra = design.model_extra or {}
    title = extra.get("title") or extra.get("name") or ""
    return f"{design.uuid}  {title}".rstrip()


def format_entries(entries: list[DisplayEntry]) -> str:
    if not entries:
        return colorize("  No templates found.", Colors.DIM)
    try:
        width = shutil.get_terminal_size().columns
    except OSError:
        width = 80
    lines = []
    current = None
    for entry in entries:
        if entry.match != current:
            current = entry.match
            lines.append(colorize(f"  {current.title()}", Colors.MAGENTA, Colors.BOLD))
        premium = colorize(" [premium]", Colors.YELLOW) if entry.design.is_premium else ""
        line = f"  {entry.position:>3}. {_design_label(entry.design)}"
        lines.append(line[: max(width - 12, 40)] + premium)
    return "\n".join(lines)


class ConsoleDisplay(DisplaySink, Notifier):
    """Keeps the latest published state; prints progress when ``verbose``."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.designs: list[Design] = []
        self.composed: list[DisplayEntry] = []
        self.loading = False
        self.pagination = PaginationState()
        self.errors: list[str] = []

    def on_aggregate_update(self, designs: list[Design], composed: list[DisplayEntry]) -> None:
        self.designs = designs
        self.composed = composed
        if self.verbose and designs:
            print(colorize(f"  … {len(designs)} templates so far", Colors.DIM))

    def on_loading_changed(self, loading: bool) -> None:
        self.loading = loading

    def on_pagination_state_changed(self, state: PaginationState) -> None:
        self.pagination = state

    def on_error(self, message: str) -> None:
        self.errors.append(message)
        print(colorize(f"  Error: {message}", Colors.RED))

    def render(self, more_hint: bool = True) -> str:
        text = format_entries(self.composed)
        if more_hint and self.pagination.has_more_pages:
            text += "\n" + colorize("  More templates available (/more)", Colors.DIM)
        return text
