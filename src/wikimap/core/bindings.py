"""
Input event bindings.

Translates discrete input events from the visualization surface into
explorer operations. Desktop and touch devices differ:

- Desktop: the first click on a node traces it, a second click on the same
  node expands it. Hovering traces; leaving a node falls back to the
  clicked node, or resets.
- Touch: a tap traces, a long press expands.

Right-clicking a node removes it on both.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from .explorer import Explorer
from .result import Ok

logger = logging.getLogger(__name__)


class InputEvent(StrEnum):
    CLICKED = "clicked"
    DOUBLE_CLICKED = "double_clicked"
    HOVERED = "hovered"
    BLURRED = "blurred"
    HELD = "held"
    RIGHT_CLICKED = "right_clicked"


class Action(StrEnum):
    EXPAND = "expand"
    TRACE = "trace"
    RESET = "reset"
    REMOVE = "remove"
    NONE = "none"


@dataclass
class Outcome:
    """What a handled event did."""
    action: Action
    node_id: Optional[str] = None
    result: object = None


class InteractionController:
    """
    Maps input events to explorer operations.

    Args:
        explorer: Session the events act on.
        touch: Use touch-screen bindings. Defaults to the explorer settings.
    """

    def __init__(self, explorer: Explorer, touch: Optional[bool] = None):
        self.explorer = explorer
        self.touch = explorer.config.touch if touch is None else touch
        self.last_clicked: Optional[str] = None

    async def handle(self, event: InputEvent, node_id: Optional[str] = None) -> Outcome:
        """Dispatch one event. ``node_id`` is None for events on empty space."""
        if event == InputEvent.RIGHT_CLICKED:
            return self._remove(node_id)

        if self.touch:
            if event in (InputEvent.HELD, InputEvent.DOUBLE_CLICKED):
                return await self._expand_or_trace(node_id)
            if event == InputEvent.CLICKED:
                return self._select(node_id)
            return Outcome(Action.NONE, node_id)

        if event in (InputEvent.CLICKED, InputEvent.DOUBLE_CLICKED):
            return await self._expand_or_trace(node_id)
        if event == InputEvent.HOVERED and node_id is not None:
            self.explorer.trace(node_id)
            return Outcome(Action.TRACE, node_id)
        if event == InputEvent.BLURRED:
            if self.last_clicked:
                self.explorer.trace(self.last_clicked)
                return Outcome(Action.TRACE, self.last_clicked)
            self.explorer.reset()
            return Outcome(Action.RESET)
        return Outcome(Action.NONE, node_id)

    # =========================================================================
    # Buttons
    # =========================================================================

    def active_node(self) -> Optional[str]:
        """The selection, falling back to the last clicked node."""
        return self.explorer.selected_node or self.last_clicked

    def remove_selected(self) -> Outcome:
        target = self.active_node()
        if target is None:
            return Outcome(Action.NONE)
        return self._remove(target)

    async def expand_selected(self) -> Outcome:
        """Expand the active node, or pick a random one to select instead."""
        target = self.active_node()
        if target is None:
            return self.select_random()
        self.explorer.focus(target)
        result = await self.explorer.expand(target)
        return Outcome(Action.EXPAND, target, result)

    def select_random(self) -> Outcome:
        """Trace a random node and move the camera to it."""
        node_id = self.explorer.random_node()
        if node_id is None:
            return Outcome(Action.NONE)
        self.last_clicked = node_id
        self.explorer.trace(node_id)
        self.explorer.focus(node_id)
        return Outcome(Action.TRACE, node_id)

    def open_active_or_random(self) -> Optional[str]:
        """
        Page URL of the active node.

        With nothing active, a random node is selected instead and None is
        returned.
        """
        target = self.active_node()
        if target is None:
            self.select_random()
            return None
        self.explorer.focus(target)
        return self.explorer.page_url(target)

    # =========================================================================
    # Internals
    # =========================================================================

    async def _expand_or_trace(self, node_id: Optional[str]) -> Outcome:
        if node_id is None:
            self.last_clicked = None
            self.explorer.reset()
            return Outcome(Action.RESET)

        if self.touch or node_id == self.last_clicked:
            result = await self.explorer.expand(node_id)
            if isinstance(result, Ok):
                # Follow the node through a rename
                self.last_clicked = result.value.node_id
            return Outcome(Action.EXPAND, node_id, result)

        return self._select(node_id)

    def _select(self, node_id: Optional[str]) -> Outcome:
        if node_id is None:
            self.last_clicked = None
            self.explorer.reset()
            return Outcome(Action.RESET)
        self.last_clicked = node_id
        self.explorer.trace(node_id)
        return Outcome(Action.TRACE, node_id)

    def _remove(self, node_id: Optional[str]) -> Outcome:
        if node_id is None or not self.explorer.remove(node_id):
            return Outcome(Action.NONE, node_id)
        if self.last_clicked == node_id:
            self.last_clicked = None
        logger.debug(f"Removed {node_id}")
        return Outcome(Action.REMOVE, node_id)
