"""Tests for the status workflow engine (no database needed)."""
from datetime import datetime, timezone

import pytest

from app.exceptions import InvalidStatusTransition
from app.models.wish import Wish, WishStatus
from app.services import workflow

LEGAL = {
    (WishStatus.wish, WishStatus.in_progress),
    (WishStatus.in_progress, WishStatus.achieved),
}
ALL_PAIRS = [(src, dst) for src in WishStatus for dst in WishStatus]


def _wish(status: WishStatus, achieved_at=None) -> Wish:
    return Wish(wish_id="w-1", title="Visit Japan", status=status, achieved_at=achieved_at)


class TestTransitionTable:
    """The table is total over status x status."""

    @pytest.mark.parametrize("src,dst", ALL_PAIRS)
    def test_can_transition_matches_table(self, src, dst):
        assert workflow.can_transition(src, dst) == ((src, dst) in LEGAL)

    @pytest.mark.parametrize("src,dst", [p for p in ALL_PAIRS if p not in LEGAL])
    def test_illegal_move_raises_and_changes_nothing(self, src, dst):
        stamp = datetime(2025, 1, 1, tzinfo=timezone.utc) if src == WishStatus.achieved else None
        wish = _wish(src, achieved_at=stamp)

        with pytest.raises(InvalidStatusTransition) as exc_info:
            workflow.transition(wish, dst)

        assert exc_info.value.from_status == src
        assert exc_info.value.to_status == dst
        assert exc_info.value.status_code == 400
        assert wish.status == src
        assert wish.achieved_at == stamp

    def test_self_transitions_are_illegal(self):
        for status in WishStatus:
            assert not workflow.can_transition(status, status)

    def test_achieved_is_terminal(self):
        assert workflow.TRANSITIONS[WishStatus.achieved] == frozenset()
        assert workflow.next_status(WishStatus.achieved) is None


class TestTransitionEffects:
    def test_wish_to_in_progress_leaves_achieved_at_empty(self):
        wish = workflow.transition(_wish(WishStatus.wish), WishStatus.in_progress)
        assert wish.status == WishStatus.in_progress
        assert wish.achieved_at is None

    def test_entering_achieved_stamps_timestamp(self):
        now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        wish = workflow.transition(_wish(WishStatus.in_progress), WishStatus.achieved, now=now)
        assert wish.status == WishStatus.achieved
        assert wish.achieved_at == now

    def test_existing_achieved_at_is_never_overwritten(self):
        original = datetime(2024, 6, 1, tzinfo=timezone.utc)
        wish = _wish(WishStatus.in_progress, achieved_at=original)
        workflow.transition(wish, WishStatus.achieved, now=datetime(2026, 1, 1, tzinfo=timezone.utc))
        assert wish.achieved_at == original

    def test_accepts_raw_status_values(self):
        wish = workflow.transition(_wish(WishStatus.wish), "IN_PROGRESS")
        assert wish.status == WishStatus.in_progress

    def test_error_message_names_both_states(self):
        with pytest.raises(InvalidStatusTransition) as exc_info:
            workflow.transition(_wish(WishStatus.achieved), WishStatus.in_progress)
        assert "from ACHIEVED to IN_PROGRESS" in exc_info.value.message
        assert exc_info.value.detail["code"] == "invalid_transition"
        assert exc_info.value.detail["from_status"] == "ACHIEVED"
        assert exc_info.value.detail["to_status"] == "IN_PROGRESS"


class TestNextStatus:
    def test_linear_progression(self):
        assert workflow.next_status(WishStatus.wish) == WishStatus.in_progress
        assert workflow.next_status(WishStatus.in_progress) == WishStatus.achieved

    def test_display_names(self):
        assert [s.display_name for s in WishStatus] == ["Wish", "In Progress", "Achieved"]
