def require_positive_int(v, name: str = "value") -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{name} must be an integer")
    if v <= 0:
        raise ValueError(f"{name} must be > 0")
    return v


def require_non_empty_str(v, name: str = "value") -> str:
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return v
