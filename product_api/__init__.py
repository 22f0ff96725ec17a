"""Product API: a REST service for managing products in a document store."""

__version__ = "1.0.0"
