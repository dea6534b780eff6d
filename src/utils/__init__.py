"""Display helpers."""

from .board_visualizer import render_board

__all__ = ["render_board"]
