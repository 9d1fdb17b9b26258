from .blocks import insert_period, remove_period
from .fallback import fallback_grid

__all__ = ["fallback_grid", "insert_period", "remove_period"]
