"""Application pagination – offset page primitives."""
from searchsync.application.pagination.page_request import PageRequest
from searchsync.application.pagination.page import Page

__all__ = ["Page", "PageRequest"]
