"""Infrastructure layer: catalog loading, registry, rendering, logging and errors."""
