"""Services facade: the debounced query controller for UI clients."""

from alumsearch.services.query import QueryController

__all__ = ["QueryController"]
