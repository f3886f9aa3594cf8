def to_uppercase(value: str | None) -> str | None:
    """Uppercase a raw env value ("info" -> "INFO"); None passes through."""
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """Lowercase a raw env value ("JSON" -> "json"); None passes through."""
    if value is None:
        return None
    return value.strip().lower()


def non_negative_int(value: int) -> int:
    """
    Reject negative limits.

    Used for size knobs where 0 already means "no limit" and a negative number can only be a typo.
    """
    if value < 0:
        raise ValueError(f"must be >= 0, got {value}")
    return value
