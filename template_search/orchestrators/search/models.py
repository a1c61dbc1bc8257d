"""State and value models for the search pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from pydantic import BaseModel, Field

from template_search.contracts.catalog_v1 import CategoryBucket, Design
from template_search.orchestrators.search.constants import (
    DEFAULT_PAGE_BUILDER,
    GenerationState,
)
from template_search.orchestrators.search.merger import flatten, merge_buckets, merge_flat


class QueryContext(BaseModel):
    """Business details sent along with every catalog call."""

    business_name: str = Field(default="")
    business_type: str = Field(default="", description="Onboarding business type; 'others' when unknown")
    page_builder: str = Field(default=DEFAULT_PAGE_BUILDER)
    suggested_keywords: list[str] = Field(default_factory=list, description="Keywords inferred during onboarding")


@dataclass(frozen=True)
class AggregateState:
    """Bucketed results plus the flat, uuid-unique list in first-seen order."""

    buckets: list[CategoryBucket] = field(default_factory=list)
    designs: list[Design] = field(default_factory=list)

    def fold(self, incoming: list[CategoryBucket]) -> AggregateState:
        return AggregateState(
            buckets=merge_buckets(self.buckets, incoming),
            designs=merge_flat(self.designs, flatten(incoming)),
        )

    def __len__(self) -> int:
        return len(self.designs)


@dataclass(frozen=True)
class PaginationState:
    """``current_page`` is the page the next fetch requests."""

    current_page: int = 1
    is_loading_page: bool = False
    has_more_pages: bool = False
    exhausted: bool = False

    def update(self, **changes) -> PaginationState:
        return replace(self, **changes)


@dataclass
class GenerationOutcome:
    generation: int
    keywords: list[str]
    state: GenerationState = GenerationState.IDLE
    resolved_keywords: list[str] = field(default_factory=list)
    failed_keywords: list[str] = field(default_factory=list)
    total_designs: int = 0
    topped_up: bool = False
