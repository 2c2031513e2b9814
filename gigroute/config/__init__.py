"""Configuration loading for gigroute"""

from .loader import ConfigLoader

__all__ = ["ConfigLoader"]
