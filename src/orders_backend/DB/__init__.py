"""Key-value stores for presets and orders."""
from .api import DataStore, make_store

__all__ = ["DataStore", "make_store"]
