"""FastAPI dependency utilities."""

from functools import lru_cache

from pushgate.config import get_settings
from pushgate.infrastructure.push import PushChannelConfig


@lru_cache
def get_push_channel_config() -> PushChannelConfig:
    """Return the delivery channel configuration built from the settings."""

    return PushChannelConfig.from_settings(get_settings())
