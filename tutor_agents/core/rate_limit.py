"""Per-client request ceiling for the chat endpoint."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from tutor_agents.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    enabled=settings.rate_limit_enabled,
)
