"""Domain services."""

from .base import Service
from .conversation_service import ConversationService, ConversationSummary, SeedEntry
from .discovery_service import DiscoveryService
from .jwt_service import JWTService
from .live import LiveOutbox, LiveTransport, Subscription, match_topic, user_topic
from .match_service import MatchService, ReviewEligibility
from .notification_service import NotificationService
from .presence import PresenceRegistry
from .streams import LiveStream, MessageStream, NotificationStream

__all__ = [
    "ConversationService",
    "ConversationSummary",
    "DiscoveryService",
    "JWTService",
    "LiveOutbox",
    "LiveStream",
    "LiveTransport",
    "MatchService",
    "MessageStream",
    "NotificationService",
    "NotificationStream",
    "PresenceRegistry",
    "ReviewEligibility",
    "SeedEntry",
    "Service",
    "Subscription",
    "match_topic",
    "user_topic",
]
