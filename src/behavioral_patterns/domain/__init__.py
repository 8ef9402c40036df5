"""Domain layer: catalog models, events and exceptions."""
