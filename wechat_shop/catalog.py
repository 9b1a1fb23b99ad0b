from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ProductOption:
    id: str
    title: str
    price: int


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str
    options: Tuple[ProductOption, ...]


CATALOG: Tuple[CatalogEntry, ...] = (
    CatalogEntry(
        id="wechat_acc",
        name="WeChat Account",
        options=(
            ProductOption(id="d1", title="1 month", price=40000),
            ProductOption(id="d3", title="3 months", price=80000),
            ProductOption(id="d6", title="6 months", price=120000),
        ),
    ),
)


def _index(catalog: Tuple[CatalogEntry, ...]) -> Dict[str, Tuple[CatalogEntry, ProductOption]]:
    index: Dict[str, Tuple[CatalogEntry, ProductOption]] = {}
    for entry in catalog:
        if not entry.options:
            raise ValueError(f"catalog entry {entry.id} has no options")
        for opt in entry.options:
            if opt.id in index:
                raise ValueError(f"duplicate option id: {opt.id}")
            index[opt.id] = (entry, opt)
    return index


_OPTIONS = _index(CATALOG)


def get_catalog_entry() -> CatalogEntry:
    return CATALOG[0]


def find_option(option_id: str) -> Optional[ProductOption]:
    hit = _OPTIONS.get(option_id)
    return hit[1] if hit else None


def entry_for_option(option_id: str) -> Optional[CatalogEntry]:
    hit = _OPTIONS.get(option_id)
    return hit[0] if hit else None
