from .orchestrator import ANY_FORMAT, Selector, resolve_links, select_links

__all__ = ["ANY_FORMAT", "Selector", "resolve_links", "select_links"]
