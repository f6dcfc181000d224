"""Tests for sort key derivation."""

import pytest

from fat_sorter.core.sort_keys import build_sort_key, kind_prefix, sort_entries
from fat_sorter.models.entry import EntrySnapshot, OrderingPolicy


def snap(name, is_directory=False):
    return EntrySnapshot(name=name, is_directory=is_directory, mod_time=0)


def names(entries):
    return [entry.name for entry in entries]


class TestKindPrefix:
    """Test folder/file prefixes per policy."""

    def test_subfolders_first(self):
        assert kind_prefix(True, OrderingPolicy.SUBFOLDERS_FIRST) < kind_prefix(False, OrderingPolicy.SUBFOLDERS_FIRST)

    def test_subfolders_last(self):
        assert kind_prefix(True, OrderingPolicy.SUBFOLDERS_LAST) > kind_prefix(False, OrderingPolicy.SUBFOLDERS_LAST)

    def test_mixed_has_no_prefix(self):
        assert kind_prefix(True, OrderingPolicy.MIXED) == ""
        assert kind_prefix(False, OrderingPolicy.MIXED) == ""


class TestBuildSortKey:
    """Test build_sort_key."""

    def test_case_insensitive_key_layout(self):
        key = build_sort_key(snap("Banana"), OrderingPolicy.MIXED, case_sensitive=False)
        assert key == "banana Banana"

    def test_case_sensitive_key_is_plain_name(self):
        key = build_sort_key(snap("Banana"), OrderingPolicy.MIXED, case_sensitive=True)
        assert key == "Banana"

    def test_prefix_applied(self):
        key = build_sort_key(snap("x", is_directory=True), OrderingPolicy.SUBFOLDERS_FIRST, True)
        assert key == "1 x"

    def test_deterministic(self):
        for policy in OrderingPolicy:
            for case_sensitive in (False, True):
                first = build_sort_key(snap("Same.TXT"), policy, case_sensitive)
                second = build_sort_key(snap("Same.TXT"), policy, case_sensitive)
                assert first == second

    def test_modification_time_does_not_affect_key(self):
        older = EntrySnapshot(name="a", is_directory=False, mod_time=1)
        newer = EntrySnapshot(name="a", is_directory=False, mod_time=2)
        assert build_sort_key(older, OrderingPolicy.MIXED) == build_sort_key(newer, OrderingPolicy.MIXED)


class TestSortEntries:
    """Test ordering of whole listings."""

    def test_case_insensitive_order(self):
        entries = [snap("Banana"), snap("apple")]
        assert names(sort_entries(entries, OrderingPolicy.MIXED, case_sensitive=False)) == ["apple", "Banana"]

    def test_strict_case_uses_codepoint_order(self):
        entries = [snap("apple"), snap("Banana")]
        assert names(sort_entries(entries, OrderingPolicy.MIXED, case_sensitive=True)) == ["Banana", "apple"]

    def test_names_differing_only_by_case_stay_together(self):
        entries = [snap("b"), snap("README"), snap("Readme"), snap("a"), snap("readme")]
        result = names(sort_entries(entries, OrderingPolicy.MIXED, case_sensitive=False))
        assert result == ["a", "b", "README", "Readme", "readme"]

    def test_subfolders_first(self):
        entries = [snap("b.txt"), snap("A.txt"), snap("sub", is_directory=True)]
        result = names(sort_entries(entries, OrderingPolicy.SUBFOLDERS_FIRST))
        assert result == ["sub", "A.txt", "b.txt"]

    def test_subfolders_last(self):
        entries = [snap("zeta", is_directory=True), snap("b.txt"), snap("alpha", is_directory=True), snap("A.txt")]
        result = names(sort_entries(entries, OrderingPolicy.SUBFOLDERS_LAST))
        assert result == ["A.txt", "b.txt", "alpha", "zeta"]

    def test_mixed_interleaves_by_name(self):
        entries = [snap("c.txt"), snap("b", is_directory=True), snap("a.txt")]
        result = names(sort_entries(entries, OrderingPolicy.MIXED))
        assert result == ["a.txt", "b", "c.txt"]

    @pytest.mark.parametrize("policy,folders_first", [
        (OrderingPolicy.SUBFOLDERS_FIRST, True),
        (OrderingPolicy.SUBFOLDERS_LAST, False),
    ])
    def test_every_folder_on_one_side(self, policy, folders_first):
        entries = [snap(name, is_directory=(i % 2 == 0))
                   for i, name in enumerate(["m", "A", "z", "b", "Q", "0", "~x", "é"])]
        kinds = [entry.is_directory for entry in sort_entries(entries, policy)]
        expected = sorted(kinds, reverse=folders_first)
        assert kinds == expected

    def test_empty_and_single(self):
        assert sort_entries([], OrderingPolicy.MIXED) == []
        only = snap("only")
        assert sort_entries([only], OrderingPolicy.MIXED) == [only]
