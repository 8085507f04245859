"""Elasticsearch adapter – SearchEngine over the async client."""
from searchsync.adapters.elasticsearch.engine import IGNORE_MALFORMED, ElasticsearchEngine

__all__ = ["IGNORE_MALFORMED", "ElasticsearchEngine"]
