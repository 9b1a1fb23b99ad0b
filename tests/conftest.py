import dataclasses
import json
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from wechat_shop.db.json_store import CartStore
from wechat_shop.utils import formatters


@pytest.fixture(autouse=True)
def plain_money(monkeypatch):
    # prices render as bare numbers regardless of a local .env
    monkeypatch.setattr(formatters, "settings", dataclasses.replace(formatters.settings, currency=""))


@pytest.fixture
def carts_path(tmp_path):
    return str(tmp_path / "data" / "carts.json")


@pytest.fixture
def store(carts_path):
    return CartStore(carts_path)


@pytest.fixture
def write_carts(carts_path):
    def _write(data):
        os.makedirs(os.path.dirname(carts_path), exist_ok=True)
        with open(carts_path, "w", encoding="utf-8") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)
        return carts_path

    return _write


def make_message(user_id=42, first_name="Ann", text="/start"):
    m = MagicMock()
    m.from_user.id = user_id
    m.from_user.first_name = first_name
    m.text = text
    m.answer = AsyncMock()
    m.answer_document = AsyncMock()
    return m


def make_callback(data, user_id=42):
    cb = MagicMock()
    cb.from_user.id = user_id
    cb.data = data
    cb.answer = AsyncMock()
    cb.message = make_message(user_id=user_id)
    return cb
