import dataclasses

import pytest

from wechat_shop.catalog import (
    CatalogEntry,
    ProductOption,
    _index,
    entry_for_option,
    find_option,
    get_catalog_entry,
)


def test_single_entry_with_three_tiers():
    entry = get_catalog_entry()
    assert entry.id == "wechat_acc"
    assert entry.name == "WeChat Account"
    assert [(o.id, o.title, o.price) for o in entry.options] == [
        ("d1", "1 month", 40000),
        ("d3", "3 months", 80000),
        ("d6", "6 months", 120000),
    ]


def test_find_option_hit_and_miss():
    assert find_option("d3").price == 80000
    assert find_option("unknown_id") is None
    assert entry_for_option("d6").id == "wechat_acc"
    assert entry_for_option("nope") is None


def test_options_are_immutable():
    opt = find_option("d1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        opt.price = 1


def test_duplicate_option_ids_rejected():
    a = CatalogEntry("a", "A", (ProductOption("x", "X", 1),))
    b = CatalogEntry("b", "B", (ProductOption("x", "X again", 2),))
    with pytest.raises(ValueError):
        _index((a, b))


def test_entry_without_options_rejected():
    with pytest.raises(ValueError):
        _index((CatalogEntry("a", "A", ()),))
