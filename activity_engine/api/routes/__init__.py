from . import activities

__all__ = ["activities"]
