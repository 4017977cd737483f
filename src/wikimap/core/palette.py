"""
Level-based colors for nodes and edges.

Nodes get lighter the further they are from their root. Traced nodes use
the same scheme on an amber base.
"""

from typing import Tuple

NODE_BASE_COLOR = "#03a9f4"
TRACE_BASE_COLOR = "#ffc107"

# Percent lightened per level
LEVEL_STEP = 5
# Edges are drawn in a darker shade of the node they point to
EDGE_SHADE = 20


def _to_rgb(hex_color: str) -> Tuple[int, int, int]:
    value = hex_color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _to_hex(rgb: Tuple[int, int, int]) -> str:
    return "#" + "".join(f"{max(0, min(255, c)):02x}" for c in rgb)


def lighten(hex_color: str, percent: float) -> str:
    """Move each channel ``percent`` of the way towards white."""
    return _to_hex(tuple(c + int((255 - c) * percent / 100) for c in _to_rgb(hex_color)))


def darken(hex_color: str, percent: float) -> str:
    """Move each channel ``percent`` of the way towards black."""
    return _to_hex(tuple(c - int(c * percent / 100) for c in _to_rgb(hex_color)))


def node_color(level: int) -> str:
    return lighten(NODE_BASE_COLOR, min(LEVEL_STEP * level, 90))


def trace_color(level: int) -> str:
    return lighten(TRACE_BASE_COLOR, min(LEVEL_STEP * level, 90))


def edge_color(level: int) -> str:
    return darken(node_color(level), EDGE_SHADE)
