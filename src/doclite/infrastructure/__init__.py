"""Infrastructure layer for DocLite."""
