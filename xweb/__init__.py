"""A small multi-threaded HTTP server with trie routing, request filters and an asynchronous file logger."""

__version__ = "0.1.0"