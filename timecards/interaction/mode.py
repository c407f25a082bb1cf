"""
Interaction Mode - Chooses drag or tap once per session.

Phones (narrow and touch) and tablets (wide, touch and a coarse
primary pointer) get tap mode. Everything else, including touch
laptops whose primary pointer is fine, gets drag mode.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .drag import DragController
from .tap import TapController

MOBILE_MAX_WIDTH = 768


class InteractionMode(Enum):
    DRAG = "drag"
    TAP = "tap"


@dataclass(frozen=True)
class DeviceProfile:
    """What the presentation layer knows about the device."""
    viewport_width: int
    has_touch: bool = False
    coarse_pointer: bool = False

    @property
    def is_mobile(self) -> bool:
        return self.viewport_width < MOBILE_MAX_WIDTH

    @property
    def is_tablet(self) -> bool:
        return self.has_touch and self.coarse_pointer and not self.is_mobile


def select_mode(profile: DeviceProfile) -> InteractionMode:
    if (profile.is_mobile and profile.has_touch) or profile.is_tablet:
        return InteractionMode.TAP
    return InteractionMode.DRAG


def create_controller(mode: InteractionMode) -> Union[DragController, TapController]:
    """Fresh, empty controller for the mode."""
    if mode == InteractionMode.TAP:
        return TapController()
    return DragController()
