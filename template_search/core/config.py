"""Configuration from environment variables (.env)."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> list[str]:
    return [item.strip().lower() for item in os.getenv(name, "").split(",") if item.strip()]


def _env_number(name: str, default, cast, invalid: list[str]):
    """Parse a numeric env var; unparsable values keep the default and are recorded."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        invalid.append(f"{name} must be a number, got {raw!r}")
        return default


@dataclass
class Config:
    project_root: Path
    logs_dir: Path
    catalog_url: str
    catalog_timeout: float
    business_name: str
    business_type: str
    page_builder: str
    show_premium_templates: bool
    hide_site_features: list[str]
    page_size: int
    min_results_before_top_up: int
    invalid_values: list[str] = field(default_factory=list)

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        logs_dir = os.getenv("TEMPLATE_SEARCH_LOGS_DIR", "")
        invalid: list[str] = []
        return cls(
            project_root=project_root,
            logs_dir=Path(logs_dir) if logs_dir else project_root / "logs",
            catalog_url=os.getenv("CATALOG_URL", "http://localhost:8080/wp-json"),
            catalog_timeout=_env_number("CATALOG_TIMEOUT", 10.0, float, invalid),
            business_name=os.getenv("CATALOG_BUSINESS_NAME", ""),
            business_type=os.getenv("CATALOG_BUSINESS_TYPE", "others"),
            page_builder=os.getenv("CATALOG_PAGE_BUILDER", "spectra"),
            show_premium_templates=_env_bool("SHOW_PREMIUM_TEMPLATES", True),
            hide_site_features=_env_list("HIDE_SITE_FEATURES"),
            page_size=_env_number("TEMPLATE_PAGE_SIZE", 9, int, invalid),
            min_results_before_top_up=_env_number("TEMPLATE_MIN_RESULTS", 4, int, invalid),
            invalid_values=invalid,
        )

    def validate(self) -> list[str]:
        errors = list(self.invalid_values)
        if not self.catalog_url.strip():
            errors.append("CATALOG_URL is empty")
        if not self.catalog_timeout > 0:
            errors.append(f"CATALOG_TIMEOUT must be positive, got {self.catalog_timeout}")
        if self.page_size < 1:
            errors.append(f"TEMPLATE_PAGE_SIZE must be at least 1, got {self.page_size}")
        if self.min_results_before_top_up < 0:
            errors.append(
                f"TEMPLATE_MIN_RESULTS must not be negative, got {self.min_results_before_top_up}"
            )
        return errors


config = Config.load()
