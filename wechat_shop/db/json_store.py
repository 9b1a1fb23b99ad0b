from __future__ import annotations

import copy
import itertools
import json
import logging
import os
import tempfile
import threading
import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from wechat_shop.catalog import find_option
from wechat_shop.errors import EmptyCartError, OptionNotFound, StoreLoadCorrupt, StoreWriteFailure
from wechat_shop.models import Cart, CartLine, CartSummary, OrderReceipt
from wechat_shop.services.pricing import summarize
from wechat_shop.utils.validators import require_non_empty_str, require_positive_int

log = logging.getLogger(__name__)

UserId = Union[str, int]

# shared by every store in the process so order ids never repeat
_ORDER_SEQ = itertools.count(1)


def _parse_cart(raw: Any) -> Cart:
    if not isinstance(raw, dict) or not isinstance(raw.get("items", []), list):
        raise ValueError("cart must be an object with an items list")
    cart = Cart()
    for it in raw.get("items", []):
        if not isinstance(it, dict):
            raise ValueError("cart item must be an object")
        option_id = require_non_empty_str(it.get("optionId"), "optionId")
        qty = require_positive_int(it.get("qty"), "qty")
        line = cart.line_for(option_id)
        if line:
            line.qty += qty
        else:
            cart.items.append(CartLine(option_id=option_id, qty=qty))
    return cart


def read_snapshot(path: str) -> Dict[str, Cart]:
    """
    Reads the whole user -> cart mapping.

    A missing or blank file is an empty store. Anything unreadable or
    malformed raises StoreLoadCorrupt.
    """
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise StoreLoadCorrupt(f"cannot read {path}: {e}") from e

    if not text.strip():
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StoreLoadCorrupt(f"invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise StoreLoadCorrupt(f"{path} must hold a JSON object")

    carts: Dict[str, Cart] = {}
    for user_id, raw in data.items():
        try:
            # lone surrogates load fine but can never be written back
            user_id.encode("utf-8")
            carts[str(user_id)] = _parse_cart(raw)
        except ValueError as e:
            raise StoreLoadCorrupt(f"bad cart for user {user_id} in {path}: {e}") from e
    return carts


def write_snapshot(path: str, carts: Dict[str, Cart]) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    data = {uid: cart.to_dict() for uid, cart in carts.items()}

    fd, tmp_path = tempfile.mkstemp(prefix=".carts-", suffix=".tmp", dir=directory)
    try:
        f = os.fdopen(fd, "w", encoding="utf-8")
    except BaseException:
        os.close(fd)
        os.remove(tmp_path)
        raise
    try:
        with f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


class CartStore:
    """Per-user carts held in memory and flushed in full after every change."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()
        self._carts: Dict[str, Cart] = self._load()

    def _load(self) -> Dict[str, Cart]:
        try:
            carts = read_snapshot(self.path)
        except StoreLoadCorrupt as e:
            log.warning("cart store unreadable, starting empty: %s", e)
            return {}
        log.info("loaded %d carts from %s", len(carts), self.path)
        return carts

    def _flush(self) -> None:
        try:
            write_snapshot(self.path, self._carts)
        except (OSError, ValueError) as e:
            # ValueError covers text that cannot be encoded to UTF-8
            log.exception("failed to persist carts to %s", self.path)
            raise StoreWriteFailure(self.path, e) from e

    def _mutate(self, user_id: UserId, change: Callable[[Cart], None]) -> Cart:
        key = str(user_id)
        with self._lock:
            before: Optional[Cart] = copy.deepcopy(self._carts.get(key))
            cart = self._carts.setdefault(key, Cart())
            change(cart)
            try:
                self._flush()
            except StoreWriteFailure:
                if before is None:
                    self._carts.pop(key, None)
                else:
                    self._carts[key] = before
                raise
            return copy.deepcopy(cart)

    def get_or_create_cart(self, user_id: UserId) -> Cart:
        with self._lock:
            cart = self._carts.setdefault(str(user_id), Cart())
            return copy.deepcopy(cart)

    def add_item(self, user_id: UserId, option_id: str) -> Cart:
        if find_option(option_id) is None:
            raise OptionNotFound(option_id)

        def _add(cart: Cart) -> None:
            line = cart.line_for(option_id)
            if line:
                line.qty += 1
            else:
                cart.items.append(CartLine(option_id=option_id, qty=1))

        return self._mutate(user_id, _add)

    def get_summary(self, user_id: UserId) -> CartSummary:
        key = str(user_id)
        with self._lock:
            return summarize(self._carts.get(key) or Cart(), key)

    def clear_cart(self, user_id: UserId) -> None:
        self._mutate(user_id, lambda cart: cart.items.clear())

    def checkout(self, user_id: UserId) -> OrderReceipt:
        key = str(user_id)
        with self._lock:
            cart = self._carts.get(key)
            if cart is None or cart.is_empty:
                raise EmptyCartError(key)

            summary = summarize(cart, key)
            if summary.is_empty:
                # only stale lines left, nothing that can be priced
                raise EmptyCartError(key)
            self._mutate(key, lambda c: c.items.clear())

            receipt = OrderReceipt(
                order_id=f"ORD{int(time.time() * 1000)}-{next(_ORDER_SEQ)}",
                user_id=key,
                lines=summary.lines,
                total=summary.total,
                created_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            )
        log.info("order %s placed by %s, total=%d", receipt.order_id, key, receipt.total)
        return receipt
