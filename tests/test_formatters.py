import dataclasses

import pytest

from wechat_shop import config
from wechat_shop.utils import formatters
from wechat_shop.utils.validators import require_non_empty_str, require_positive_int


def test_money_groups_thousands():
    assert formatters.money(40000) == "40,000"
    assert formatters.money(0) == "0"


def test_money_with_currency(monkeypatch):
    monkeypatch.setattr(formatters, "settings", dataclasses.replace(formatters.settings, currency="UZS"))
    assert formatters.money(120000) == "120,000 UZS"


def test_require_positive_int():
    assert require_positive_int(3) == 3
    for bad in (0, -1, 1.5, "2", True):
        with pytest.raises(ValueError):
            require_positive_int(bad, "qty")


def test_require_non_empty_str():
    assert require_non_empty_str("d1") == "d1"
    for bad in ("", "  ", None, 5):
        with pytest.raises(ValueError):
            require_non_empty_str(bad)


def test_env_helpers_fall_back(monkeypatch):
    monkeypatch.delenv("SHOP_TEST_A", raising=False)
    monkeypatch.setenv("SHOP_TEST_B", " 12 ")
    assert config._get_env("SHOP_TEST_A", "SHOP_TEST_B") == "12"
    assert config._get_env("SHOP_TEST_A", default="x") == "x"


def test_bot_token_required(monkeypatch):
    monkeypatch.setattr(config, "settings", dataclasses.replace(config.settings, bot_token=""))
    with pytest.raises(RuntimeError):
        config.require_bot_token()


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("false", False), ("No", False)],
)
def test_bool_flag_accepts_words(monkeypatch, raw, expected):
    monkeypatch.setenv("SHOP_TEST_FLAG", raw)
    assert config._get_bool("SHOP_TEST_FLAG", default=not expected) is expected


def test_bool_flag_default_and_garbage(monkeypatch):
    monkeypatch.delenv("SHOP_TEST_FLAG", raising=False)
    assert config._get_bool("SHOP_TEST_FLAG", default=True) is True
    monkeypatch.setenv("SHOP_TEST_FLAG", "maybe")
    with pytest.raises(RuntimeError):
        config._get_bool("SHOP_TEST_FLAG", default=True)
