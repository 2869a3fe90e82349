"""
Animation - per-frame values: node pulsation, background color, camera orbit.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

import numpy as np

from models import Effect, VisualNode
from .interaction import Camera


PULSE_AMPLITUDE = 0.1
PULSE_RATE = 0.001  # radians per millisecond

NIGHT_COLOR = 0x001A33
DAY_COLOR = 0x87CEEB

EDGE_COLOR = 0xCCCCCC
EDGE_OPACITY = 0.3
EFFECT_COLOR = 0xFFFFFF

CAMERA_DISTANCE = 200.0
AUTO_ROTATE_SPEED = 0.5  # 2*pi/60 * speed radians per second, as in three.js OrbitControls


def pulsation_scale(node: VisualNode, now_ms: float) -> float:
    """Breathing scale, phase-shifted by x so nodes drift out of sync."""
    return 1 + PULSE_AMPLITUDE * math.sin(now_ms * PULSE_RATE + node.position.x)


def lerp_color(a: int, b: int, t: float) -> int:
    """Per-channel linear interpolation between two 0xRRGGBB colors."""
    channels = []
    for shift in (16, 8, 0):
        ca = (a >> shift) & 0xFF
        cb = (b >> shift) & 0xFF
        channels.append(int(round(ca + (cb - ca) * t)))
    return (channels[0] << 16) | (channels[1] << 8) | channels[2]


def background_color(wall_clock: datetime) -> int:
    """Night at midnight, day at noon, driven by the hour of day."""
    t = math.sin(wall_clock.hour / 24 * math.pi)
    return lerp_color(NIGHT_COLOR, DAY_COLOR, t)


def color_hex(color: int) -> str:
    return f"#{color:06x}"


class CameraRig:
    """
    Orbiting camera with auto-rotation arbitration.

    A manual drag suspends auto-rotation; the end of the drag resumes it,
    but only if it was on when the drag began.
    """

    def __init__(self, auto_rotate: bool = True, distance: float = CAMERA_DISTANCE,
                 speed: float = AUTO_ROTATE_SPEED):
        self.auto_rotate = auto_rotate
        self.distance = distance
        self.speed = speed
        self.azimuth = 0.0
        self.dragging = False
        self._resume_after_drag = False

    def drag_start(self) -> None:
        if self.dragging:
            return
        self.dragging = True
        self._resume_after_drag = self.auto_rotate
        self.auto_rotate = False

    def drag_end(self) -> None:
        if not self.dragging:
            return
        self.dragging = False
        if self._resume_after_drag:
            self.auto_rotate = True
        self._resume_after_drag = False

    def set_auto_rotate(self, enabled: bool) -> None:
        """Settings toggle. During a drag, takes effect when the drag ends."""
        if self.dragging:
            self._resume_after_drag = enabled
        else:
            self.auto_rotate = enabled

    @property
    def rotating(self) -> bool:
        return self.auto_rotate and not self.dragging

    def rotate_by(self, radians: float) -> None:
        """Manual orbit (drag delta)."""
        self.azimuth = (self.azimuth + radians) % (2 * math.pi)

    def advance(self, dt_seconds: float) -> None:
        """Advance auto-rotation by elapsed time."""
        if not self.rotating or dt_seconds <= 0:
            return
        self.rotate_by(2 * math.pi / 60 * self.speed * dt_seconds)

    def position(self) -> np.ndarray:
        return np.array([
            self.distance * math.sin(self.azimuth),
            0.0,
            self.distance * math.cos(self.azimuth),
        ])

    def camera(self, aspect: float = 16 / 9) -> Camera:
        return Camera(position=self.position(), aspect=aspect)

    def to_dict(self) -> dict:
        return {
            "position": [float(v) for v in self.position()],
            "azimuth": self.azimuth,
            "auto_rotate": self.auto_rotate,
            "dragging": self.dragging,
        }


@dataclass
class FrameState:
    """Everything a renderer needs for one frame beyond the scene itself."""
    now_ms: float
    scales: dict[str, float]
    background: int
    camera: dict
    effects: list[Effect] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "now_ms": self.now_ms,
            "scales": self.scales,
            "background": color_hex(self.background),
            "camera": self.camera,
            "effects": [e.to_dict(self.now_ms) for e in self.effects],
        }


def compose_frame(
    nodes: Sequence[VisualNode],
    effects: Sequence[Effect],
    rig: CameraRig,
    now_ms: float,
    wall_clock: datetime,
) -> FrameState:
    """Collect per-frame values. Does not advance anything."""
    return FrameState(
        now_ms=now_ms,
        scales={node.id: pulsation_scale(node, now_ms) for node in nodes},
        background=background_color(wall_clock),
        camera=rig.to_dict(),
        effects=list(effects),
    )
