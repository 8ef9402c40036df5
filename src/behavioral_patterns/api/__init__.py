"""Read-only REST API."""
