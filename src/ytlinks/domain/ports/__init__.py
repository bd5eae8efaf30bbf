from .cache import CachePort
from .page_fetcher import PageFetcherPort

__all__ = [
    "CachePort",
    "PageFetcherPort",
]
