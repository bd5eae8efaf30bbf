from .catalog import KNOWN_ITAGS, describe_itag

__all__ = ["KNOWN_ITAGS", "describe_itag"]
