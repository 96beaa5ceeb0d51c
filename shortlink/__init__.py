"""URL shortening service: short links, redirects and link history."""

__version__ = "1.0.0"
