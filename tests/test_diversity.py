import pytest
from datetime import datetime, timezone
from community_discover.diversity import apply_diversity_balancing, check_tag_diversity
from community_discover.models import ContentItem

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_item(id: str, category: str, type: str, tags: list[str] | None = None) -> ContentItem:
    return ContentItem(id=id, category=category, type=type, tags=tags or [], created_at=NOW)


class TestTagDiversity:
    """Test the tag clause of diversity balancing"""

    def test_untagged_always_passes(self):
        """Items without tags always pass"""
        assert check_tag_diversity([], {"a", "b"})

    def test_new_tag_passes(self):
        """At least one unseen tag passes"""
        assert check_tag_diversity(["a", "z"], {"a", "b"})

    def test_only_seen_tags_fail(self):
        """All tags already seen fails"""
        assert not check_tag_diversity(["a"], {"a", "b"})

    def test_cap_lifted_after_ten_tags(self):
        """Repeats allowed once 10 distinct tags are seen"""
        used = {f"t{i}" for i in range(10)}
        assert check_tag_diversity(["t1"], used)


class TestDiversityBalancing:
    """Test greedy selection and backfill"""

    def test_repeated_category_deferred(self):
        """A second item of a seen category waits behind a new category"""
        ranked = [
            make_item("1", "music", "event", ["a"]),
            make_item("2", "music", "post", ["b"]),
            make_item("3", "food", "post", ["c"]),
        ]
        result = apply_diversity_balancing(ranked, 2)
        assert [item.id for item in result] == ["1", "3"]

    def test_backfill_in_rank_order(self):
        """Skipped items fill remaining slots in score order"""
        ranked = [
            make_item("1", "music", "event", ["a"]),
            make_item("2", "music", "event", ["a"]),
            make_item("3", "music", "event", ["a"]),
        ]
        result = apply_diversity_balancing(ranked, 3)
        assert [item.id for item in result] == ["1", "2", "3"]

    def test_backfill_appends_after_diverse_picks(self):
        """Backfilled items come after the first-pass picks"""
        ranked = [
            make_item("1", "music", "event", ["a"]),
            make_item("2", "music", "event", ["b"]),
            make_item("3", "food", "post", ["c"]),
        ]
        result = apply_diversity_balancing(ranked, 3)
        assert [item.id for item in result] == ["1", "3", "2"]

    def test_category_cap_lifted_after_four(self):
        """Once 4 categories are in, a repeat category is admitted"""
        ranked = [
            make_item("1", "c1", "t1", ["a"]),
            make_item("2", "c2", "t2", ["b"]),
            make_item("3", "c3", "t3", ["c"]),
            make_item("4", "c4", "t1", ["d"]),
            make_item("5", "c1", "t2", ["e"]),
            make_item("6", "c5", "t3", ["f"]),
        ]
        result = apply_diversity_balancing(ranked, 5)
        assert [item.id for item in result] == ["1", "2", "3", "4", "5"]

    def test_type_cap_blocks_until_three(self):
        """A repeated type is refused while fewer than 3 types are in"""
        ranked = [
            make_item("1", "c1", "t1"),
            make_item("2", "c2", "t1"),
            make_item("3", "c3", "t2"),
        ]
        result = apply_diversity_balancing(ranked, 2)
        assert [item.id for item in result] == ["1", "3"]

    def test_duplicate_ids_not_dropped(self):
        """Backfill tracks items by position, not id"""
        ranked = [
            make_item("same", "music", "event", ["a"]),
            make_item("same", "music", "event", ["a"]),
        ]
        assert len(apply_diversity_balancing(ranked, 5)) == 2

    @pytest.mark.parametrize("count,limit", [(0, 5), (3, 5), (5, 5), (12, 5), (12, 0)])
    def test_output_length(self, count, limit):
        """Output length is min(limit, candidates)"""
        ranked = [make_item(str(i), "music", "event", ["a"]) for i in range(count)]
        assert len(apply_diversity_balancing(ranked, limit)) == min(limit, count)

    def test_two_categories_present_when_available(self):
        """At least 2 categories appear when the pool has 2 and limit >= 2"""
        ranked = [make_item(str(i), "music", "event", [f"m{i}"]) for i in range(10)]
        ranked.append(make_item("last", "food", "business", ["x"]))
        result = apply_diversity_balancing(ranked, 2)
        assert {item.category for item in result} == {"music", "food"}
