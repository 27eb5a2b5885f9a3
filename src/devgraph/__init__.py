"""
devgraph
GraphQL API for managing developer profiles
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
