"""Opaque identifiers for players and ledger entries."""

from collections.abc import Callable
from typing import TypeAlias
from uuid import uuid4

IdFactory: TypeAlias = Callable[[], str]


def new_id() -> str:
    return uuid4().hex
