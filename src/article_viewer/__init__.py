"""Paginated, filterable article browser for the articles HTTP API."""

__version__ = "0.1.0"
