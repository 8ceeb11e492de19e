"""EzGest backend: multi-tenant point-of-sale administration API."""

__version__ = "1.0.0"
