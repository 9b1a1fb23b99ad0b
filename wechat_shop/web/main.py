from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request

from wechat_shop.catalog import CATALOG
from wechat_shop.config import settings
from wechat_shop.db.json_store import read_snapshot
from wechat_shop.errors import StoreLoadCorrupt
from wechat_shop.models import Cart
from wechat_shop.services.pricing import summarize

log = logging.getLogger(__name__)

app = FastAPI(title="WeChat Shop Operator")
app.state.carts_path = settings.carts_path


@app.on_event("startup")
def _startup() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _carts(request: Request) -> Dict[str, Cart]:
    # read-only view: re-read the snapshot so the bot's latest write is visible
    path = request.app.state.carts_path
    try:
        return read_snapshot(path)
    except StoreLoadCorrupt as e:
        log.warning("operator view cannot read %s: %s", path, e)
        raise HTTPException(status_code=503, detail="cart store is unreadable")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/catalog")
def catalog() -> list[Dict[str, Any]]:
    return [asdict(entry) for entry in CATALOG]


# ---------------- carts ----------------

@app.get("/carts")
def carts(request: Request) -> list[Dict[str, Any]]:
    rows = []
    for user_id, cart in sorted(_carts(request).items()):
        summary = summarize(cart, user_id)
        rows.append(
            {
                "user_id": user_id,
                "lines": len(cart.items),
                "items": sum(it.qty for it in cart.items),
                "total": summary.total,
            }
        )
    return rows


@app.get("/carts/{user_id}")
def cart_detail(user_id: str, request: Request) -> Dict[str, Any]:
    cart = _carts(request).get(user_id) or Cart()
    return {"user_id": user_id, **asdict(summarize(cart, user_id))}


# ---------------- integrity ----------------

@app.get("/integrity")
def integrity(request: Request) -> list[Dict[str, Any]]:
    faults = []
    for user_id, cart in sorted(_carts(request).items()):
        summary = summarize(cart, user_id)
        if summary.unknown_option_ids:
            faults.append({"user_id": user_id, "unknown_option_ids": summary.unknown_option_ids})
    return faults
