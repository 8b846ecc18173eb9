"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from skillswap.config import AuthSettings, ConversationSettings, Settings, StoreSettings
from skillswap.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_store_settings(self, settings: Settings) -> StoreSettings:
        """Provide store settings."""
        return settings.store

    @provide(scope=Scope.APP)
    def provide_conversation_settings(self, settings: Settings) -> ConversationSettings:
        """Provide conversation settings."""
        return settings.conversation
