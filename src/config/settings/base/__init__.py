"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.guards import is_placeholder_value, missing_required
from config.settings.base.rate_limit import (
    RateLimitSettings,
    get_rate_limit_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "Environment",
    # Rate limit
    "RateLimitSettings",
    "get_base_settings",
    "get_rate_limit_settings",
    # Guards
    "is_placeholder_value",
    "missing_required",
]
