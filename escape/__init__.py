"""Public package interface for escape."""

from .cli import main
from .search import solve
from .solver import lowest

__all__ = ["main", "solve", "lowest"]
