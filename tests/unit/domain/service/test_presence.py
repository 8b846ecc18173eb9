"""Unit tests for per-process conversation presence."""

from uuid import uuid4

from skillswap.domain.service import PresenceRegistry
from skillswap.domain.value import MatchId, UserId


def test_presence_counts_overlapping_streams():
    presence = PresenceRegistry()
    match_id, user_id = MatchId(uuid4()), UserId(uuid4())

    presence.enter(match_id, user_id)
    presence.enter(match_id, user_id)  # second tab
    presence.leave(match_id, user_id)

    assert presence.is_viewing(match_id, user_id)
    presence.leave(match_id, user_id)
    assert not presence.is_viewing(match_id, user_id)
