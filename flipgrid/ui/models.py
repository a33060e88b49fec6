"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_MASK_OPACITY = 0.8


def clamp_opacity(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass
class OverlaySettings:
    """Image laid over the grid for decoration. Has no effect on play."""

    image_path: Optional[Path] = None
    opacity: float = DEFAULT_MASK_OPACITY

    def __post_init__(self) -> None:
        self.opacity = clamp_opacity(self.opacity)

    def set_opacity(self, value: float) -> None:
        self.opacity = clamp_opacity(value)

    @property
    def has_image(self) -> bool:
        return self.image_path is not None
