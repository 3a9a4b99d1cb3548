"""Tests for fuzzy drink-name matching."""
import pytest

from drinkmate.similarity import distance, rank, similarity


def _name(item):
    return item["name"]


def test_distance_classic_examples():
    assert distance("kitten", "sitting") == 3
    assert distance("flaw", "lawn") == 2
    assert distance("", "abc") == 3
    assert distance("abc", "") == 3
    assert distance("", "") == 0


def test_distance_ignores_case():
    assert distance("Vodka", "vODKA") == 0
    assert distance("Margarita", "margarta") == 1


@pytest.mark.parametrize("s", ["", "a", "Lager", "Vodka Red Bull", "Piña Colada"])
def test_distance_to_self_is_zero(s):
    assert distance(s, s) == 0
    assert similarity(s, s) == 1.0


@pytest.mark.parametrize(
    "a,b",
    [("gin", "rum"), ("Mojito", "Mohito"), ("short", "a much longer string"), ("", "stout")],
)
def test_distance_is_symmetric(a, b):
    assert distance(a, b) == distance(b, a)


def test_triangle_inequality():
    words = ["beer", "bear", "pear", "peer", "lager", "ale", ""]
    for a in words:
        for b in words:
            for c in words:
                assert distance(a, c) <= distance(a, b) + distance(b, c)


def test_similarity_range_and_empty_strings():
    assert similarity("", "") == 1.0
    assert similarity("abc", "") == 0.0
    assert similarity("Margarita", "Margarta") == pytest.approx(1 - 1 / 9)
    assert 0.0 <= similarity("gin", "champagne") <= 1.0


@pytest.mark.parametrize("a,b", [("İ", ""), ("İİ", "ab"), ("İstanbul Sour", "istanbul"), ("ẞ", "ss")])
def test_similarity_stays_in_range_when_lowercase_changes_length(a, b):
    assert 0.0 <= similarity(a, b) <= 1.0
    assert 0.0 <= similarity(b, a) <= 1.0


def test_similarity_drops_as_edits_grow():
    assert similarity("whiskey", "whiskey") > similarity("whiskey", "whisky") > similarity("whiskey", "wisky")


def test_rank_empty_query_returns_items_in_order():
    items = [{"name": "Stout"}, {"name": "Gin"}, {"name": "Ale"}]
    out = rank("", items, _name)
    assert out == items
    assert out is not items


def test_rank_substring_beats_fuzzy():
    ipa = {"name": "India Pale Ale"}
    lager = {"name": "Lager"}
    # "ale" is inside "India Pale Ale"; "Lager" only scores 1 - 3/5 = 0.4.
    assert rank("ALE", [lager, ipa], _name) == [ipa, lager]


def test_rank_filters_below_threshold():
    items = [{"name": "Lager"}, {"name": "Champagne"}]
    assert rank("xyz", items, _name) == []
    assert rank("Lagr", items, _name) == [items[0]]


def test_rank_ties_keep_input_order():
    items = [{"name": "White Wine"}, {"name": "Red Wine"}, {"name": "Rosé Wine"}]
    assert rank("wine", items, _name) == items


def test_rank_custom_threshold():
    items = [{"name": "Mojito"}]
    assert rank("Mohita", items, _name, threshold=0.9) == []
    assert rank("Mohita", items, _name, threshold=0.5) == items


def test_rank_does_not_mutate_input():
    items = [{"name": "Rum"}, {"name": "Gin"}, {"name": "Run"}]
    snapshot = list(items)
    rank("rum", items, _name)
    assert items == snapshot
