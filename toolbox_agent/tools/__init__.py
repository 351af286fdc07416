"""
Built-in tools.
"""

from .database import QueryTool

__all__ = ["QueryTool"]
