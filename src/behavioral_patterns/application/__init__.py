"""Application layer: catalog use cases and demo registration."""
