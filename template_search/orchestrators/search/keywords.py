"""Keyword normalization and the default keyword for an empty search box."""

from collections.abc import Iterable

from template_search.orchestrators.search.constants import OTHERS_BUSINESS_TYPE
from template_search.orchestrators.search.models import QueryContext


def normalize_keywords(raw: str | Iterable[str] | None) -> list[str]:
    """Split on commas, trim, lowercase and de-duplicate (first occurrence wins)."""
    if raw is None:
        return []
    parts = [raw] if isinstance(raw, str) else list(raw)
    keywords: list[str] = []
    for part in parts:
        for piece in str(part).split(","):
            keyword = piece.strip().lower()
            if keyword and keyword not in keywords:
                keywords.append(keyword)
    return keywords


def initial_keyword(context: QueryContext) -> str:
    """Business type unless it is 'others', then the first suggestion, then the business name."""
    business_type = (context.business_type or "").strip().lower()
    if business_type and business_type != OTHERS_BUSINESS_TYPE:
        return business_type
    if context.suggested_keywords:
        return context.suggested_keywords[0]
    return context.business_name
