from .fetcher import HttpFetcher
from .retry_transport import RetryTransport

__all__ = ["HttpFetcher", "RetryTransport"]
