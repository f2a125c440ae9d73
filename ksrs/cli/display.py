"""
Rich rendering helpers for the ksrs CLI.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from rich import box
from rich.table import Table

from ..storage import Storage, StoredItem

# =============================================================================
# Review Day Listings
# =============================================================================


def format_review_day(items: list[StoredItem], limit: int = 40) -> str:
    """
    Comma separated literals ordered by id.

    Args:
        items: Items to list
        limit: Literals shown before the list is cut with '...'

    Returns:
        The listing, empty for no items
    """
    literals = [i.literal for i in sorted(items, key=lambda i: i.id)]
    text = ",".join(literals[:limit])
    if len(literals) > limit:
        text += ",..."
    return text


# =============================================================================
# Statistics
# =============================================================================


@dataclass
class StorageStats:
    """Overall learning progress."""

    total: int
    learning: int
    new_per_day: int

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.learning * 100.0 / self.total

    @property
    def days_left(self) -> int:
        """Days until every item has been introduced at the current pace."""
        if self.new_per_day <= 0:
            return 0
        return math.ceil((self.total - self.learning) / self.new_per_day)

    @classmethod
    def from_storage(cls, storage: Storage, new_per_day: int) -> StorageStats:
        return cls(total=len(storage), learning=storage.learning_count(), new_per_day=new_per_day)


def build_stats_table(stats: StorageStats) -> Table:
    """Two column table with the overall stats."""
    table = Table(title="Kanji stats", box=box.ROUNDED, show_header=False)
    table.add_column("Stat", style="cyan", max_width=30)
    table.add_column("Value", style="green", justify="left")

    table.add_row("Total Kanji", f"{stats.total}字")
    table.add_row("In learning", f"{stats.learning}字")
    table.add_row("Percentage", f"{stats.percentage:.1f}%")
    table.add_row("Days left", f"{stats.days_left}日")
    return table
