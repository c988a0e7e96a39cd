"""
Best-time leaderboard.

Keeps the ten fastest wins. A winning time is inserted first as a pending
(unfinalized) entry; the presentation layer then collects a name and calls
finalize_entry to lock the row in.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import BoardConfiguration

logger = logging.getLogger(__name__)

MAX_ENTRIES = 10
DEFAULT_USER = "user"


# ============================================================================
# Leaderboard Entry
# ============================================================================

@dataclass
class LeaderboardEntry:
    """
    One row of the leaderboard.

    Attributes:
        time: Elapsed game time in milliseconds. Lower is better.
        config: Configuration the game was played with.
        user: Name of the player.
        finalized: False while the entry is waiting for a name.
    """

    time: int
    config: BoardConfiguration
    user: str = DEFAULT_USER
    finalized: bool = False

    def set_user(self, user: str) -> None:
        """Name the entry and finalize it. Ignored once finalized."""
        if not self.finalized:
            self.user = user
            self.finalized = True

    def __str__(self) -> str:
        return f"{self.user} {self.time} {self.config}"


# ============================================================================
# Leaderboard
# ============================================================================

class Leaderboard:
    """Capacity-bounded list of entries sorted by ascending time."""

    def __init__(self, max_entries: int = MAX_ENTRIES) -> None:
        self.max_entries = max_entries
        self._entries: List[LeaderboardEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def _sort(self) -> None:
        # list.sort is stable, so equal times keep insertion order
        self._entries.sort(key=lambda entry: entry.time)

    def entries(self) -> Tuple[LeaderboardEntry, ...]:
        """Ordered snapshot, fastest first."""
        self._sort()
        return tuple(self._entries)

    def lowest_rank(self) -> Optional[LeaderboardEntry]:
        """The slowest entry, or None when empty."""
        self._sort()
        return self._entries[-1] if self._entries else None

    def pending_entry(self) -> Optional[LeaderboardEntry]:
        """The entry awaiting a name, if any."""
        for entry in self._entries:
            if not entry.finalized:
                return entry
        return None

    def new_best_time(self, time: int) -> bool:
        """
        Check whether a time would earn a place on the board.

        Args:
            time: Elapsed game time in milliseconds.

        Returns:
            True if the board has free slots or the time is no worse than
            the current slowest entry.
        """
        if len(self._entries) < self.max_entries:
            return True
        return time <= self.lowest_rank().time

    def new_best_time_add(self, time: int, config: BoardConfiguration) -> bool:
        """
        Insert a pending entry for a qualifying time.

        The table is re-sorted and trimmed back to capacity. Non-qualifying
        times leave the table untouched. An entry still pending from an
        earlier win is finalized under the default name first, so at most
        one entry is ever pending.

        Returns:
            True if the entry was added.
        """
        if not self.new_best_time(time):
            return False

        stale = self.pending_entry()
        if stale is not None:
            stale.set_user(DEFAULT_USER)

        self._sort()
        # ahead of equal times, so a qualifying tie is not trimmed away
        position = next(
            (i for i, entry in enumerate(self._entries) if entry.time >= time),
            len(self._entries),
        )
        self._entries.insert(position, LeaderboardEntry(time, config))
        del self._entries[self.max_entries:]
        logger.info("New best time %d ms on %s", time, config)
        return True

    def finalize_entry(self, user: str) -> Optional[LeaderboardEntry]:
        """
        Name and lock the pending entry.

        Returns:
            The finalized entry, or None if nothing was pending.
        """
        entry = self.pending_entry()
        if entry is None:
            return None
        entry.set_user(user)
        return entry
