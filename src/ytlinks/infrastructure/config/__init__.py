from __future__ import annotations

from .load import load_config
from .schema import AppConfig, CacheConfig, EnvOverrides

__all__ = ["AppConfig", "CacheConfig", "EnvOverrides", "load_config"]
