"""FairWork modern award API integration.

- client: async httpx client with field mapping and apprentice rate fallback
- cached: TTL-cached facade used by the services
- models: DTOs for awards, classifications, pay rates and validations
- errors: FairWorkApiError and FairWorkNotFoundError
"""

from __future__ import annotations

from typing import Optional

from gto_workforce.core.cache import AsyncTTLCache
from gto_workforce.server.core.config import FairWorkConfig

from .cached import CachedFairWorkClient
from .client import FairWorkClient
from .errors import FairWorkApiError, FairWorkNotFoundError
from .models import FairWorkAward, FairWorkClassification, FairWorkPayRate, RateValidationResult


def create_fairwork_client(config: FairWorkConfig) -> Optional[CachedFairWorkClient]:
    """Build the cached client from settings, or None when no API key is configured."""
    if not config.enabled:
        return None
    client = FairWorkClient(
        config.api_url,
        api_key=config.api_key,
        environment=config.environment,
        timeout=config.timeout,
    )
    return CachedFairWorkClient(client, AsyncTTLCache(max_size=config.cache_max_size))


__all__ = [
    "CachedFairWorkClient",
    "FairWorkApiError",
    "FairWorkAward",
    "FairWorkClassification",
    "FairWorkClient",
    "FairWorkNotFoundError",
    "FairWorkPayRate",
    "RateValidationResult",
    "create_fairwork_client",
]
