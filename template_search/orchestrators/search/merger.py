"""Category merger: folds catalog results into the running aggregate.

Buckets are merged by category name, flat lists by design uuid. Display
composition removes designs already claimed by a higher-priority category.
All functions are pure; inputs are never mutated.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from template_search.contracts.catalog_v1 import CategoryBucket, Design

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayEntry:
    """One design in the final render order (positions start at 1)."""

    position: int
    match: str
    design: Design


def flatten(buckets: Iterable[CategoryBucket]) -> list[Design]:
    """All designs in bucket order, duplicates included."""
    return [design for bucket in buckets for design in bucket.designs]


def merge_flat(existing: list[Design], incoming: Iterable[Design]) -> list[Design]:
    """Append incoming designs whose uuid is not present yet, keeping incoming order."""
    seen = {design.uuid for design in existing}
    merged = list(existing)
    for design in incoming:
        if design.uuid in seen:
            continue
        seen.add(design.uuid)
        merged.append(design)
    return merged


def merge_buckets(
    existing: list[CategoryBucket], incoming: Iterable[CategoryBucket]
) -> list[CategoryBucket]:
    """Fold incoming buckets into existing ones, matching by category name.

    Known categories get only the designs they do not hold yet; unknown
    categories are appended as they arrived.
    """
    merged = list(existing)
    index_by_match = {bucket.match: i for i, bucket in enumerate(merged)}
    for bucket in incoming:
        i = index_by_match.get(bucket.match)
        if i is None:
            index_by_match[bucket.match] = len(merged)
            merged.append(bucket)
            continue
        current = merged[i]
        additions = merge_flat(current.designs, bucket.designs)[len(current.designs):]
        if additions:
            merged[i] = current.with_designs(current.designs + additions)
    return merged


def dedupe_across_categories(buckets: list[CategoryBucket]) -> list[CategoryBucket]:
    """Strip designs that a different, higher-priority category already holds.

    Walks from the lowest-priority bucket up. Each bucket loses any uuid found
    in a bucket of another category, where buckets below it have already been
    refined, so a tie always stays with the higher-priority bucket.
    """
    refined = list(buckets)
    for index in range(len(buckets) - 1, -1, -1):
        bucket = buckets[index]
        if not bucket.designs:
            continue
        claimed = {
            design.uuid
            for other in refined
            if other.match != bucket.match
            for design in other.designs
        }
        kept = [design for design in bucket.designs if design.uuid not in claimed]
        if len(kept) != len(bucket.designs):
            refined[index] = bucket.with_designs(kept)
    return refined


def designs_for(buckets: list[CategoryBucket], match: str) -> list[Design]:
    """Designs of one category after cross-category de-duplication."""
    for bucket in dedupe_across_categories(buckets):
        if bucket.match == match:
            return list(bucket.designs)
    return []


def compose_for_display(buckets: list[CategoryBucket]) -> list[DisplayEntry]:
    """Final render sequence: highest-priority category first, each uuid once."""
    entries: list[DisplayEntry] = []
    emitted: set[str] = set()
    for bucket in dedupe_across_categories(buckets):
        for design in bucket.designs:
            if design.uuid in emitted:
                continue
            emitted.add(design.uuid)
            entries.append(
                DisplayEntry(position=len(entries) + 1, match=bucket.match, design=design)
            )
    logger.debug(
        "Compose: %s buckets, %s designs -> %s entries",
        len(buckets),
        sum(len(b.designs) for b in buckets),
        len(entries),
    )
    return entries
