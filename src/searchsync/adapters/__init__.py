"""Adapters – concrete implementations of the search, store and queue ports."""
