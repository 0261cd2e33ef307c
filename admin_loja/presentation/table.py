"""Generic table model used by the list screens."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

EMPTY_MESSAGE = "Nenhum registro encontrado"


@dataclass(frozen=True)
class Column(Generic[T]):
    """A table column. Without ``render`` the attribute named by ``key`` is shown."""

    key: str
    label: str
    render: Optional[Callable[[T], Any]] = None

    def value(self, item: T) -> Any:
        if self.render is not None:
            return self.render(item)
        if isinstance(item, dict):
            return item.get(self.key)
        return getattr(item, self.key, None)


@dataclass(frozen=True)
class Table:
    columns: List[Dict[str, str]]
    rows: List[Dict[str, Any]]
    empty_message: Optional[str] = None

    def to_dict(self) -> dict:
        return {"columns": self.columns, "rows": self.rows, "emptyMessage": self.empty_message}


def build_table(
    columns: Sequence[Column[T]],
    items: Sequence[T],
    key: Callable[[T], Optional[str]],
) -> Table:
    """
    Render items into rows of column values.

    Args:
        columns: Column definitions, in display order.
        items: Items to show.
        key: Extracts the row key from an item.

    Returns:
        Table whose ``empty_message`` is set only when there are no rows.
    """
    rows = [
        {"key": key(item), "cells": {column.key: column.value(item) for column in columns}}
        for item in items
    ]
    return Table(
        columns=[{"key": column.key, "label": column.label} for column in columns],
        rows=rows,
        empty_message=None if rows else EMPTY_MESSAGE,
    )
