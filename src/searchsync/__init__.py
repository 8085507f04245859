"""
searchsync – keep a relational record store in sync with a search index.

Import path convention::

    from searchsync.application.search import SearchBuilder, SearchableModel
    from searchsync.application.sync import SyncDispatcher
    from searchsync.adapters.elasticsearch import ElasticsearchEngine
    from searchsync.kernel.errors import ValidationError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
