from __future__ import annotations


class ShopError(Exception):
    """Base class for cart and catalog failures."""


class OptionNotFound(ShopError):
    def __init__(self, option_id: str):
        super().__init__(f"option not found: {option_id}")
        self.option_id = option_id


class EmptyCartError(ShopError):
    def __init__(self, user_id: str):
        super().__init__(f"cart is empty: {user_id}")
        self.user_id = user_id


class StoreLoadCorrupt(ShopError):
    """The snapshot file exists but cannot be parsed into carts."""


class StoreWriteFailure(ShopError):
    def __init__(self, path: str, cause: Exception):
        super().__init__(f"failed to write {path}: {cause}")
        self.path = path
