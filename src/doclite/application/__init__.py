"""Application layer for DocLite."""
