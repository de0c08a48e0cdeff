"""Status workflow engine — the only code allowed to change ``Wish.status``.

    WISH ──► IN_PROGRESS ──► ACHIEVED (terminal)

Self-transitions and every other move are rejected.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from app.exceptions import InvalidStatusTransition
from app.models.wish import Wish, WishStatus

logger = logging.getLogger(__name__)

TRANSITIONS: dict[WishStatus, frozenset[WishStatus]] = {
    WishStatus.wish: frozenset({WishStatus.in_progress}),
    WishStatus.in_progress: frozenset({WishStatus.achieved}),
    WishStatus.achieved: frozenset(),
}

_NEXT: dict[WishStatus, Optional[WishStatus]] = {
    WishStatus.wish: WishStatus.in_progress,
    WishStatus.in_progress: WishStatus.achieved,
    WishStatus.achieved: None,
}


def can_transition(current: WishStatus, target: WishStatus) -> bool:
    return target in TRANSITIONS[current]


def next_status(current: WishStatus) -> Optional[WishStatus]:
    """The single legal successor of ``current``, or None when terminal."""
    return _NEXT[current]


def transition(wish: Wish, target: WishStatus, now: Optional[datetime] = None) -> Wish:
    """Move ``wish`` to ``target`` in memory; the caller persists.

    Entering ACHIEVED stamps ``achieved_at`` only if it is still empty, so an
    existing timestamp is never overwritten. Leaving ACHIEVED would not clear it.
    """
    current = WishStatus(wish.status)
    target = WishStatus(target)
    if not can_transition(current, target):
        logger.warning("Rejected transition %s -> %s for wish %s", current.value, target.value, wish.wish_id)
        raise InvalidStatusTransition(current, target)

    wish.status = target
    if target == WishStatus.achieved and wish.achieved_at is None:
        wish.achieved_at = now or datetime.now(timezone.utc)
    return wish
