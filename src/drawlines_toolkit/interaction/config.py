"""
Module: interaction.config

Purpose:
    Layout and behaviour constants for the interaction controller.
    Immutable configuration with validation on construction.

Key Classes:
    - InteractionConfig: Home-tray layout, handle radius, movement rules

Dependencies:
    - dataclasses (std)

Used By:
    - interaction.controller.InteractionController
    - interaction.manager.QuestionManager
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class InteractionConfig:
    """
    Interaction configuration (immutable).

    The home tray stacks one slot per line. Slot i draws its line from
    (slot_start_x, first_slot_y + i * slot_height) to
    (slot_end_x, first_slot_y + i * slot_height).

    Attributes:
        slot_height: Height of one home-tray slot in pixels
        first_slot_y: y of the first slot's line
        slot_start_x: x of a home line's start handle
        slot_end_x: x of a home line's end handle
        handle_radius: Radius of the handle circles
        return_home_margin: A placed line goes home once its start handle is
            lower than (drop height - return_home_margin)
        keyboard_step: Pixels moved per arrow/WASD key press

    Example:
        >>> config = InteractionConfig(slot_height=60)
        >>> config.home_tray_height(3)
        180
    """

    slot_height: int = 50
    first_slot_y: int = 25
    slot_start_x: int = 50
    slot_end_x: int = 200
    handle_radius: int = 10
    return_home_margin: int = 20
    keyboard_step: int = 1

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.slot_height <= 0:
            raise ValueError(f"slot_height must be positive: {self.slot_height}")
        if not 0 <= self.first_slot_y <= self.slot_height:
            raise ValueError(
                f"first_slot_y must lie within the first slot: {self.first_slot_y}"
            )
        if self.slot_start_x < 0:
            raise ValueError(f"slot_start_x must be non-negative: {self.slot_start_x}")
        if self.slot_end_x <= self.slot_start_x:
            raise ValueError(
                f"slot_end_x must be > slot_start_x: {self.slot_end_x} <= {self.slot_start_x}"
            )
        if self.handle_radius < 0:
            raise ValueError(f"handle_radius must be non-negative: {self.handle_radius}")
        if self.return_home_margin < 0:
            raise ValueError(f"return_home_margin must be non-negative: {self.return_home_margin}")
        if self.keyboard_step <= 0:
            raise ValueError(f"keyboard_step must be positive: {self.keyboard_step}")

    def home_tray_height(self, line_count: int) -> int:
        """Height of a home tray holding line_count lines."""
        return line_count * self.slot_height

    def home_slot_y(self, index: int) -> int:
        """y of the line in home slot index (zero-based)."""
        return self.first_slot_y + index * self.slot_height

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> InteractionConfig:
        """
        Build from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If a known value is invalid
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: int(value) for key, value in data.items() if key in known})
