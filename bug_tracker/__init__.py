"""Bug tracker: REST API over a document store plus a Python client."""

__version__ = "1.0.0"
