"""Core domain primitives shared by every pattern and the catalog."""
