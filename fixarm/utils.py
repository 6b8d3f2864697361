from datetime import datetime, timezone
from typing import TypeVar

T = TypeVar("T")


def utc() -> datetime:
    return datetime.now(timezone.utc)


def case_insensitive_eq(left: T, right: T) -> bool:
    if isinstance(left, str) and isinstance(right, str):
        return left.lower() == right.lower()
    else:
        return left == right
