from .formats import parse_cipher, parse_format_entries
from .page import (
    WatchPageParser,
    extract_player_response,
    extract_player_url,
    extract_video_id,
    is_rate_limited,
    watch_url,
)

__all__ = [
    "WatchPageParser",
    "extract_player_response",
    "extract_player_url",
    "extract_video_id",
    "is_rate_limited",
    "parse_cipher",
    "parse_format_entries",
    "watch_url",
]
