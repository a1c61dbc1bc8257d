"""Structured logging: console plus a JSON-lines event file."""

import json
import logging
import os
import sys
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from template_search.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0s"
    if seconds >= 60:
        m = int(seconds // 60)
        s = seconds % 60
        if s < 0.05:
            return f"{m}m"
        return f"{m}m {s:.0f}s" if s >= 1 else f"{m}m {s:.1f}s"
    if seconds >= 0.05:
        return f"{seconds:.1f}s"
    if seconds > 0:
        return "<0.1s"
    return "0s"


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    # 38;5;N = foreground 256-color
    codes = {
        "dim": "\033[38;5;239m",
        "keyword": "\033[38;5;81m",
        "run": "\033[38;5;78m",
        "done_ok": "\033[38;5;78m",
        "done_fail": "\033[38;5;203m",
        "duration": "\033[38;5;221m",
        "generation": "\033[38;5;245m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class SearchLogger:
    def __init__(self):
        config.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = config.logs_dir / "search.log"
        self._file_lock = threading.Lock()
        self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("template_search")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.INFO)
            handler.setFormatter(self._console_formatter)
            self.console.addHandler(handler)
        self._setup_third_party_console_logging()

    def _setup_third_party_console_logging(self):
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)
        handler.setFormatter(self._console_formatter)
        for name in ("httpx", "httpcore"):
            log = logging.getLogger(name)
            log.setLevel(logging.WARNING)
            log.propagate = False
            if not log.handlers:
                log.addHandler(handler)

    def log_event(self, event: LogEvent) -> None:
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def _gen(self, generation: int) -> str:
        return f"{_c('generation')}[gen {generation}]{_reset()}"

    def search_started(self, generation: int, keywords: list[str], page_builder: str):
        event = LogEvent(
            event_type="SEARCH_STARTED",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "keywords": keywords,
                "page_builder": page_builder,
            },
        )
        self.log_event(event)
        self.console.info(
            f"{self._gen(generation)} {_c('run')}▶ Search{_reset()}  "
            f"{_c('keyword')}{', '.join(keywords)}{_reset()}  ({page_builder})"
        )

    def keyword_resolved(
        self, generation: int, keyword: str, result_count: int, started_at: float
    ):
        elapsed = time.monotonic() - started_at
        event = LogEvent(
            event_type="KEYWORD_RESOLVED",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "keyword": keyword,
                "result_count": result_count,
                "duration_seconds": round(elapsed, 3),
            },
        )
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(elapsed)}{_reset()}"
        self.console.info(
            f"{self._gen(generation)}   {_c('keyword')}{keyword}{_reset()}  "
            f"{result_count} designs  in {dur}  {_c('done_ok')}[ok]{_reset()}"
        )

    def keyword_failed(self, generation: int, keyword: str, error: Exception):
        event = LogEvent(
            event_type="KEYWORD_FAILED",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "keyword": keyword,
                "error": str(error)[:500],
                "error_type": type(error).__name__,
            },
        )
        self.log_event(event)
        self.console.warning(
            f"{self._gen(generation)}   {_c('keyword')}{keyword}{_reset()}  "
            f"{_c('done_fail')}[failed]{_reset()} {type(error).__name__}: {error}"
        )

    def generation_discarded(self, generation: int, reason: str, live: int | None = None):
        event = LogEvent(
            event_type="GENERATION_DISCARDED",
            timestamp=self._timestamp(),
            data={"generation": generation, "live": live, "reason": reason},
        )
        self.log_event(event)
        self.console.debug(f"{self._gen(generation)} dropped ({reason}, live: {live})")

    def generation_settled(self, generation: int, total: int, failed: list[str]):
        event = LogEvent(
            event_type="GENERATION_SETTLED",
            timestamp=self._timestamp(),
            data={"generation": generation, "total": total, "failed_keywords": failed},
        )
        self.log_event(event)
        suffix = f"  failed: {', '.join(failed)}" if failed else ""
        self.console.info(
            f"{self._gen(generation)} {_c('done_ok')}✓ Settled{_reset()}  {total} designs{suffix}"
        )

    def page_requested(self, generation: int, page: int, page_size: int):
        event = LogEvent(
            event_type="PAGE_REQUESTED",
            timestamp=self._timestamp(),
            data={"generation": generation, "page": page, "page_size": page_size},
        )
        self.log_event(event)
        self.console.info(f"{self._gen(generation)} {_c('run')}▶ Page {page}{_reset()}")

    def page_fetched(
        self, generation: int, page: int, last_page: int, result_count: int, started_at: float
    ):
        elapsed = time.monotonic() - started_at
        event = LogEvent(
            event_type="PAGE_FETCHED",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "page": page,
                "last_page": last_page,
                "result_count": result_count,
                "duration_seconds": round(elapsed, 3),
            },
        )
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(elapsed)}{_reset()}"
        self.console.info(
            f"{self._gen(generation)}   page {page}/{last_page}  {result_count} designs  in {dur}"
        )

    def page_failed(self, generation: int, page: int, error: Exception):
        event = LogEvent(
            event_type="PAGE_FAILED",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "page": page,
                "error": str(error)[:500],
                "error_type": type(error).__name__,
            },
        )
        self.log_event(event)
        self.console.warning(
            f"{self._gen(generation)}   page {page}  {_c('done_fail')}[failed]{_reset()} {error}"
        )

    def error(self, message: str, *args, exception: Exception | None = None, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={
                "message": message,
                "exception": str(exception) if exception else None,
            },
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        if exception and "exc_info" not in log_kwargs:
            log_kwargs["exc_info"] = exception

        self.console.error(f"❌ Error: {message}", *args, **log_kwargs)

    def debug(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="DEBUG", timestamp=self._timestamp(), data={"message": message}
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.debug(message, *args, **log_kwargs)


logger = SearchLogger()
