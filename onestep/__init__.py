"""Treatment booking workflow: models, registries, step handlers and a small web app."""

__version__ = "0.1.0"
__all__ = ["__version__"]