"""
Rendering toolkit for the skirmish simulator.

- render_board: plain-text board with hit point annotations (traces, CLI)
- RenderStateBuilder: JSON snapshots for the HTTP API and frames
"""

from .render_state import RenderStateBuilder
from .text import render_board, render_row

__all__ = ["RenderStateBuilder", "render_board", "render_row"]
