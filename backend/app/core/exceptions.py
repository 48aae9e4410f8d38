"""
Domain exceptions raised by the search services
"""


class SearchError(Exception):
    """Base class for search failures"""


class SearchValidationError(SearchError):
    """Request rejected before touching the course store"""
