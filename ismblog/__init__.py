"""ism-blog: a small markdown blog server."""

__version__ = "0.1.0"
