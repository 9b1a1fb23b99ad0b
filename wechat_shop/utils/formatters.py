from wechat_shop.config import settings


def money(v: int) -> str:
    s = f"{v:,}"
    return f"{s} {settings.currency}" if settings.currency else s
