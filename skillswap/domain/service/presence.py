"""Per-process conversation presence.

Nothing here is authoritative: presence reflects the live subscriptions
held by this process.
"""

from collections import Counter

from skillswap.domain.value import MatchId, UserId


class PresenceRegistry:
    """Tracks which participants are viewing which conversations."""

    def __init__(self) -> None:
        self._viewers: Counter[tuple[MatchId, UserId]] = Counter()

    def enter(self, match_id: MatchId, user_id: UserId) -> None:
        self._viewers[(match_id, user_id)] += 1

    def leave(self, match_id: MatchId, user_id: UserId) -> None:
        key = (match_id, user_id)
        self._viewers[key] -= 1
        if self._viewers[key] <= 0:
            del self._viewers[key]

    def is_viewing(self, match_id: MatchId, user_id: UserId) -> bool:
        return self._viewers.get((match_id, user_id), 0) > 0
