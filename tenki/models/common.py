"""Common types and helpers shared across models."""

from datetime import datetime, timedelta, timezone
from typing import TypeAlias

AreaCode: TypeAlias = str

JST = timezone(timedelta(hours=9), "JST")


class TenkiError(Exception):
    """Base class for errors surfaced to the top-level run."""


def local_now() -> datetime:
    return datetime.now(JST)
