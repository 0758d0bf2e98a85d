"""Visualizer settings and JSON preset loading.

Example:
    A preset file only needs the keys it changes::

        {"segment_duration": 0.5, "path_color": [255, 128, 0, 255]}

    >>> settings = load_settings("slow.json")
    >>> settings.window_width
    1024
"""

from __future__ import annotations
import json
from typing import Annotated, Optional, Tuple

from pydantic import BaseModel, Field

Channel = Annotated[int, Field(ge=0, le=255)]
Color = Tuple[Channel, Channel, Channel, Channel]


class VisualizerSettings(BaseModel):
    """Fixed visual and timing constants of the visualizer."""

    window_width: int = Field(1024, gt=0)
    window_height: int = Field(720, gt=0)
    title: str = "Cubic Solver"

    background_color: Color = (0x18, 0x18, 0x18, 0xFF)
    entity_color: Color = (0x00, 0x00, 0xFF, 0xFF)
    target_color: Color = (0x00, 0xFF, 0x00, 0xFF)
    path_color: Color = (0xFF, 0xFF, 0xFF, 0xFF)

    entity_size: float = Field(20.0, gt=0)
    target_size: float = Field(24.0, gt=0)

    # Points per sampled segment
    path_resolution: int = Field(100, ge=2)
    # Seconds per segment; t = elapsed / segment_duration
    segment_duration: float = Field(1.0, gt=0)
    # 0 means uncapped
    max_fps: int = Field(0, ge=0)

    @property
    def initial_position(self) -> Tuple[float, float]:
        """Window centre, where the entity and target start."""
        return (self.window_width / 2.0, self.window_height / 2.0)


def load_settings(filepath: str, base: Optional[VisualizerSettings] = None) -> VisualizerSettings:
    """Load settings from a JSON preset file.

    Args:
        filepath: Path to the JSON file.
        base: Settings the file is applied on top of (defaults when omitted).

    Returns:
        New settings with the file's values merged in.

    Raises:
        ValueError: On keys the settings model does not know, or invalid values.
    """
    with open(filepath, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Preset file must contain a JSON object, got {type(data).__name__}")

    supported = set(VisualizerSettings.model_fields)
    unknown = set(data.keys()) - supported
    if unknown:
        raise ValueError(f"Unknown parameters in preset file: {unknown}. Supported: {supported}")

    merged = (base or VisualizerSettings()).model_dump()
    merged.update(data)
    return VisualizerSettings.model_validate(merged)
