"""
Interaction Adapter - Turns input gestures into engine requests.

Two modes, chosen once per session from the device profile:
- Drag: pick up a hand card, preview the insertion point, drop
- Tap: select a hand card, then tap an insertion target

Both produce the same intents (PlacementIntent, ReorderIntent).
Controller state is disposable and never merged into GameState.
"""

from .intents import Intent, PlacementIntent, ReorderIntent
from .drag import DragController, DragState, Edge, HandSlotTarget, TimelineTarget
from .tap import TapController, TapState
from .press import DescriptionView, PressOutcome, PressTracker, describe
from .mode import DeviceProfile, InteractionMode, create_controller, select_mode

__all__ = [
    "Intent",
    "PlacementIntent",
    "ReorderIntent",
    "DragController",
    "DragState",
    "Edge",
    "HandSlotTarget",
    "TimelineTarget",
    "TapController",
    "TapState",
    "DescriptionView",
    "PressOutcome",
    "PressTracker",
    "describe",
    "DeviceProfile",
    "InteractionMode",
    "create_controller",
    "select_mode",
]
