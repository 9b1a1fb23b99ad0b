from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CartLine:
    option_id: str
    qty: int

    def to_dict(self) -> Dict[str, Any]:
        return {"optionId": self.option_id, "qty": self.qty}


@dataclass
class Cart:
    items: List[CartLine] = field(default_factory=list)

    def line_for(self, option_id: str) -> Optional[CartLine]:
        for line in self.items:
            if line.option_id == option_id:
                return line
        return None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [line.to_dict() for line in self.items]}


@dataclass(frozen=True)
class SummaryLine:
    option_id: str
    title: str
    unit_price: int
    qty: int
    line_total: int


@dataclass(frozen=True)
class CartSummary:
    lines: List[SummaryLine]
    total: int
    unknown_option_ids: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    user_id: str
    lines: List[SummaryLine]
    total: int
    created_at: str
