"""
Unit tests for the best-time leaderboard.
"""
import pytest
from minesuite import EASY, MEDIUM, Leaderboard, LeaderboardEntry, MAX_ENTRIES


def fill(board: Leaderboard, times) -> None:
    """Add and name one entry per time."""
    for time in times:
        board.new_best_time_add(time, EASY)
        board.finalize_entry(f"p{time}")


# ============================================================================
# Entry Tests
# ============================================================================

class TestLeaderboardEntry:
    """Test a single row."""

    def test_new_entry_is_pending(self) -> None:
        entry = LeaderboardEntry(1500, EASY)
        assert entry.user == "user"
        assert entry.finalized is False

    def test_set_user_finalizes(self) -> None:
        entry = LeaderboardEntry(1500, EASY)
        entry.set_user("ada")
        assert entry.user == "ada"
        assert entry.finalized is True

    def test_finalized_entry_is_locked(self) -> None:
        entry = LeaderboardEntry(1500, EASY)
        entry.set_user("ada")
        entry.set_user("bob")
        assert entry.user == "ada"

    def test_string_form(self) -> None:
        entry = LeaderboardEntry(1500, EASY, user="ada")
        assert str(entry) == "ada 1500 10:8:8"


# ============================================================================
# New Best Time Tests
# ============================================================================

class TestNewBestTime:
    """Test the qualification predicate."""

    def test_any_time_qualifies_when_not_full(self) -> None:
        board = Leaderboard()
        fill(board, range(100, 109))
        assert len(board) == 9
        assert board.new_best_time(10 ** 9) is True

    def test_full_board_rejects_slower_time(self) -> None:
        board = Leaderboard()
        fill(board, range(100, 110))
        assert board.new_best_time(110) is False

    def test_full_board_accepts_equal_or_faster(self) -> None:
        board = Leaderboard()
        fill(board, range(100, 110))
        assert board.new_best_time(109) is True
        assert board.new_best_time(1) is True


# ============================================================================
# Insert and Trim Tests
# ============================================================================

class TestInsertAndTrim:
    """Test bounded, sorted insertion."""

    def test_eleven_times_keep_best_ten(self) -> None:
        board = Leaderboard()
        times = [500, 100, 900, 300, 700, 200, 1000, 400, 800, 600, 50]
        fill(board, times)

        stored = [entry.time for entry in board.entries()]
        assert len(board) == MAX_ENTRIES
        assert stored == sorted(times)[:10]
        assert 1000 not in stored

    def test_rejected_time_leaves_table_unchanged(self) -> None:
        board = Leaderboard()
        fill(board, range(100, 110))
        before = board.entries()

        assert board.new_best_time_add(5000, EASY) is False
        assert board.entries() == before
        assert board.pending_entry() is None

    def test_added_entry_is_pending_until_named(self) -> None:
        board = Leaderboard()
        assert board.new_best_time_add(1234, MEDIUM) is True
        pending = board.pending_entry()
        assert pending.time == 1234
        assert pending.config == MEDIUM

        finalized = board.finalize_entry("grace")
        assert finalized is pending
        assert pending.user == "grace"
        assert board.pending_entry() is None

    def test_finalize_without_pending_is_noop(self) -> None:
        board = Leaderboard()
        fill(board, [100])
        assert board.finalize_entry("nobody") is None
        assert board.entries()[0].user == "p100"

    def test_tie_with_slowest_replaces_it(self) -> None:
        """A time equal to the worst qualifies and stays on the board."""
        board = Leaderboard()
        fill(board, range(100, 110))
        assert board.new_best_time_add(109, EASY) is True

        entries = board.entries()
        assert len(entries) == MAX_ENTRIES
        assert entries[-1].time == 109
        assert entries[-1].finalized is False

    def test_only_one_pending_entry(self) -> None:
        """An unnamed earlier record is locked under the default name."""
        board = Leaderboard()
        board.new_best_time_add(300, EASY)
        board.new_best_time_add(200, EASY)

        pending = [entry for entry in board.entries() if not entry.finalized]
        assert [entry.time for entry in pending] == [200]
        assert board.entries()[1].user == "user"

    def test_lowest_rank(self) -> None:
        board = Leaderboard()
        assert board.lowest_rank() is None
        fill(board, [300, 100, 200])
        assert board.lowest_rank().time == 300

    @pytest.mark.parametrize("capacity", [1, 3])
    def test_custom_capacity(self, capacity: int) -> None:
        board = Leaderboard(max_entries=capacity)
        fill(board, [40, 30, 20, 10])
        assert [e.time for e in board.entries()] == [10, 20, 30, 40][:capacity]
