from .download_links import RATE_LIMIT_ERROR, DownloadLinksUseCase

__all__ = ["RATE_LIMIT_ERROR", "DownloadLinksUseCase"]
