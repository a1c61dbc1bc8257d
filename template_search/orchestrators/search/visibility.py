"""Visibility filter: hides premium and restricted-feature designs before merging."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from template_search.contracts.catalog_v1 import CategoryBucket, Design
from template_search.core.config import Config


@dataclass(frozen=True)
class VisibilityConfig:
    hide_premium: bool = False
    hide_features: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_config(cls, cfg: Config) -> "VisibilityConfig":
        return cls(
            hide_premium=not cfg.show_premium_templates,
            hide_features=frozenset(cfg.hide_site_features),
        )

    @classmethod
    def of(cls, hide_premium: bool = False, hide_features: Iterable[str] = ()) -> "VisibilityConfig":
        return cls(hide_premium=hide_premium, hide_features=frozenset(hide_features))


def is_visible(design: Design, visibility: VisibilityConfig) -> bool:
    if visibility.hide_premium and design.is_premium:
        return False
    return not any(design.supports(feature) for feature in visibility.hide_features)


def filter_hidden(
    buckets: Iterable[CategoryBucket], visibility: VisibilityConfig
) -> list[CategoryBucket]:
    """Drop hidden designs from every bucket, keeping bucket and design order."""
    buckets = list(buckets)
    if not visibility.hide_premium and not visibility.hide_features:
        return buckets
    return [
        bucket.with_designs([d for d in bucket.designs if is_visible(d, visibility)])
        for bucket in buckets
    ]
