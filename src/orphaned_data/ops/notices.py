"""Status notices shown once on the next render of an admin screen."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

NoticeType = Literal["success", "info", "warning", "error"]


@dataclass(frozen=True, slots=True)
class Notice:
    """A single admin notice."""

    message: str
    type: NoticeType = "info"
    code: str = ""


class NoticeQueue:
    """FIFO of notices; :meth:`drain` hands each notice out exactly once."""

    def __init__(self) -> None:
        self._items: list[Notice] = []

    def add(self, message: str, type: NoticeType = "info", *, code: str = "") -> Notice:
        notice = Notice(message=message, type=type, code=code)
        self._items.append(notice)
        return notice

    def drain(self) -> list[Notice]:
        items, self._items = self._items, []
        return items

    def __iter__(self) -> Iterator[Notice]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
