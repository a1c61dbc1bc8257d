from template_search.contracts.catalog_v1 import CategoryBucket, Design
from template_search.orchestrators.search.merger import (
    compose_for_display,
    dedupe_across_categories,
    designs_for,
    flatten,
    merge_buckets,
    merge_flat,
)


def _d(uuid: str, **extra) -> Design:
    return Design(uuid=uuid, **extra)


def _b(match: str, *uuids: str) -> CategoryBucket:
    return CategoryBucket(match=match, designs=[_d(u) for u in uuids])


def _ids(designs) -> list[str]:
    return [d.uuid for d in designs]


class TestMergeFlat:
    def test_appends_only_new_identifiers_in_incoming_order(self):
        merged = merge_flat([_d("a"), _d("b")], [_d("c"), _d("a"), _d("d"), _d("c")])
        assert _ids(merged) == ["a", "b", "c", "d"]

    def test_identity_is_uuid_not_payload(self):
        merged = merge_flat([_d("a", title="old")], [_d("a", title="new")])
        assert len(merged) == 1
        assert merged[0].model_extra["title"] == "old"

    def test_does_not_mutate_existing(self):
        existing = [_d("a")]
        merge_flat(existing, [_d("b")])
        assert _ids(existing) == ["a"]


class TestMergeBuckets:
    def test_same_category_gets_only_new_designs(self):
        merged = merge_buckets([_b("recommended", "a", "b")], [_b("recommended", "b", "c")])
        assert [b.match for b in merged] == ["recommended"]
        assert _ids(merged[0].designs) == ["a", "b", "c"]

    def test_unknown_category_is_appended_as_is(self):
        merged = merge_buckets([_b("recommended", "a")], [_b("generic", "a", "z")])
        assert [b.match for b in merged] == ["recommended", "generic"]
        assert _ids(merged[1].designs) == ["a", "z"]

    def test_matches_by_name_not_position(self):
        existing = [_b("recommended", "a"), _b("partial", "p")]
        incoming = [_b("partial", "q"), _b("recommended", "b")]
        merged = merge_buckets(existing, incoming)
        assert [b.match for b in merged] == ["recommended", "partial"]
        assert _ids(merged[0].designs) == ["a", "b"]
        assert _ids(merged[1].designs) == ["p", "q"]

    def test_merging_twice_is_idempotent(self):
        existing = [_b("recommended", "a"), _b("partial", "p")]
        incoming = [_b("recommended", "a", "b"), _b("generic", "g", "a")]
        once = merge_buckets(existing, incoming)
        twice = merge_buckets(once, incoming)
        assert twice == once

    def test_into_empty_state(self):
        incoming = [_b("recommended", "a"), _b("partial", "b")]
        assert merge_buckets([], incoming) == incoming

    def test_does_not_mutate_inputs(self):
        existing = [_b("recommended", "a")]
        merge_buckets(existing, [_b("recommended", "b")])
        assert _ids(existing[0].designs) == ["a"]


class TestComposition:
    def test_design_in_recommended_and_partial_is_shown_once_as_recommended(self):
        buckets = [_b("recommended", "U1", "r2"), _b("partial", "U1", "p2")]
        entries = compose_for_display(buckets)
        assert [(e.position, e.match, e.design.uuid) for e in entries] == [
            (1, "recommended", "U1"),
            (2, "recommended", "r2"),
            (3, "partial", "p2"),
        ]

    def test_generic_loses_anything_already_in_higher_categories(self):
        buckets = [
            _b("recommended", "a"),
            _b("partial", "b"),
            _b("generic", "a", "b", "c"),
        ]
        refined = dedupe_across_categories(buckets)
        assert [_ids(b.designs) for b in refined] == [["a"], ["b"], ["c"]]
        assert _ids(e.design for e in compose_for_display(buckets)) == ["a", "b", "c"]

    def test_partial_and_generic_overlap_resolves_to_partial(self):
        buckets = [_b("recommended"), _b("partial", "x"), _b("generic", "x", "y")]
        assert designs_for(buckets, "partial") == [_d("x")]
        assert _ids(designs_for(buckets, "generic")) == ["y"]

    def test_positions_are_contiguous_from_one(self):
        buckets = [_b("recommended", "a", "b"), _b("partial", "c"), _b("generic", "d", "a")]
        entries = compose_for_display(buckets)
        assert [e.position for e in entries] == [1, 2, 3, 4]

    def test_empty_buckets_compose_to_nothing(self):
        assert compose_for_display([]) == []
        assert compose_for_display([_b("recommended"), _b("generic")]) == []

    def test_designs_for_unknown_category_is_empty(self):
        assert designs_for([_b("recommended", "a")], "generic") == []

    def test_composition_leaves_buckets_untouched(self):
        buckets = [_b("recommended", "a"), _b("generic", "a", "b")]
        compose_for_display(buckets)
        assert _ids(buckets[1].designs) == ["a", "b"]

    def test_flatten_keeps_bucket_order_and_duplicates(self):
        assert _ids(flatten([_b("recommended", "a"), _b("generic", "a", "b")])) == ["a", "a", "b"]
