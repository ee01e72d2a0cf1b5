"""DocLite - schema-less JSON document store over HTTP.

Clients name a collection in the URL path and DocLite provisions a
SQLite table for it on first use.
"""

__version__ = "0.1.0"

from doclite.infrastructure.api.app import app

__all__ = ["app", "__version__"]
