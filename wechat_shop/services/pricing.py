from __future__ import annotations

import logging
from typing import List

from wechat_shop.catalog import find_option
from wechat_shop.models import Cart, CartSummary, SummaryLine

log = logging.getLogger(__name__)


def summarize(cart: Cart, user_id: str = "") -> CartSummary:
    """
    Prices every line of the cart against the catalog.

    Lines whose option is gone from the catalog are left out of the total
    and reported in ``unknown_option_ids``.
    """
    lines: List[SummaryLine] = []
    unknown: List[str] = []
    total = 0

    for it in cart.items:
        opt = find_option(it.option_id)
        if opt is None:
            unknown.append(it.option_id)
            continue
        line_total = opt.price * it.qty
        total += line_total
        lines.append(
            SummaryLine(
                option_id=opt.id,
                title=opt.title,
                unit_price=opt.price,
                qty=it.qty,
                line_total=line_total,
            )
        )

    if unknown:
        log.warning("cart %s references unknown options: %s", user_id or "?", ", ".join(unknown))

    return CartSummary(lines=lines, total=total, unknown_option_ids=unknown)
