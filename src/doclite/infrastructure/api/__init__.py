"""HTTP API for DocLite."""
