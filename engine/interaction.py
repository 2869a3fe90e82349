"""
Interaction - pointer hit testing and the hover highlight state machine.

The highlight computation is pure and knows nothing about materials; a
renderer maps HighlightLevel to whatever visual treatment it likes.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

import numpy as np

from models import HighlightLevel, VisualNode


@dataclass
class Camera:
    """Perspective camera looking from `position` at `target`."""
    position: np.ndarray
    target: np.ndarray = field(default_factory=lambda: np.zeros(3))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    fov_deg: float = 75.0
    aspect: float = 16 / 9
    near: float = 0.1
    far: float = 1000.0

    def basis(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(forward, right, up) unit vectors."""
        forward = self.target - self.position
        forward = forward / np.linalg.norm(forward)
        right = np.cross(forward, self.up)
        right = right / np.linalg.norm(right)
        true_up = np.cross(right, forward)
        return forward, right, true_up


@dataclass
class Ray:
    origin: np.ndarray
    direction: np.ndarray  # unit length


def ray_from_pointer(ndc_x: float, ndc_y: float, camera: Camera) -> Ray:
    """
    Ray from the camera through a pointer position.

    Pointer coordinates are normalized device coordinates: x and y in
    [-1, 1], +y up, (0, 0) at the screen center.
    """
    forward, right, up = camera.basis()
    half_height = math.tan(math.radians(camera.fov_deg) / 2)
    half_width = half_height * camera.aspect
    direction = forward + ndc_x * half_width * right + ndc_y * half_height * up
    direction = direction / np.linalg.norm(direction)
    return Ray(origin=np.asarray(camera.position, dtype=float), direction=direction)


def intersect_sphere(ray: Ray, center: np.ndarray, radius: float) -> Optional[float]:
    """Distance along the ray to the first hit on the sphere, or None."""
    offset = ray.origin - center
    b = float(np.dot(offset, ray.direction))
    c = float(np.dot(offset, offset)) - radius * radius
    discriminant = b * b - c
    if discriminant < 0:
        return None
    root = math.sqrt(discriminant)
    near = -b - root
    if near >= 0:
        return near
    far = -b + root
    if far >= 0:
        return far  # Ray starts inside the sphere
    return None


def hit_test(
    ray: Ray,
    nodes: Sequence[VisualNode],
    scale_for: Optional[Callable[[VisualNode], float]] = None,
) -> Optional[VisualNode]:
    """
    Nearest node intersected by the ray.

    Args:
        ray: Pointer ray
        nodes: Candidate nodes
        scale_for: Optional per-node scale applied to the radius (pulsation)
    """
    best: Optional[VisualNode] = None
    best_distance = math.inf
    for node in nodes:
        radius = node.radius * (scale_for(node) if scale_for else 1.0)
        distance = intersect_sphere(ray, np.array(node.position.as_tuple()), radius)
        if distance is not None and distance < best_distance:
            best, best_distance = node, distance
    return best


def compute_highlights(
    nodes: Sequence[VisualNode],
    target: Optional[VisualNode],
) -> dict[str, HighlightLevel]:
    """
    Highlight level for every node given the hovered target.

    No target: everything Dim. Otherwise the target is Selected, nodes
    related to it (category or day) are Normal, and the rest are Dim.
    """
    if target is None:
        return {node.id: HighlightLevel.DIM for node in nodes}

    levels = {}
    for node in nodes:
        if node.id == target.id:
            levels[node.id] = HighlightLevel.SELECTED
        elif node.is_related(target):
            levels[node.id] = HighlightLevel.NORMAL
        else:
            levels[node.id] = HighlightLevel.DIM
    return levels


def apply_highlights(nodes: Sequence[VisualNode], levels: dict[str, HighlightLevel]) -> None:
    for node in nodes:
        level = levels.get(node.id, HighlightLevel.DIM)
        if node.highlight_level != level:
            node.highlight_level = level


class InteractionState(str, Enum):
    IDLE = "idle"
    HOVERING = "hovering"


class InteractionMachine:
    """
    Idle / Hovering(target) state machine.

    Highlights are recomputed on every pointer move, not only on state
    transitions, since the hit result can change with every event.
    """

    def __init__(self):
        self.state = InteractionState.IDLE
        self.target_id: Optional[str] = None

    @property
    def is_hovering(self) -> bool:
        return self.state == InteractionState.HOVERING

    def pointer_move(
        self,
        ray: Ray,
        nodes: Sequence[VisualNode],
        scale_for: Optional[Callable[[VisualNode], float]] = None,
    ) -> Optional[VisualNode]:
        """Hit test and update highlights. Returns the hovered node, if any."""
        target = hit_test(ray, nodes, scale_for)
        self.hover(target, nodes)
        return target

    def hover(self, target: Optional[VisualNode], nodes: Sequence[VisualNode]) -> None:
        """Enter Hovering(target), or Idle when target is None."""
        if target is None:
            self.state = InteractionState.IDLE
            self.target_id = None
        else:
            self.state = InteractionState.HOVERING
            self.target_id = target.id
        apply_highlights(nodes, compute_highlights(nodes, target))

    def leave(self, nodes: Sequence[VisualNode]) -> None:
        """Pointer left the view."""
        self.hover(None, nodes)

    def reapply(self, nodes: Sequence[VisualNode]) -> None:
        """
        Re-derive highlights over a freshly reconciled node set.

        If the hovered node did not survive reconciliation, fall back to Idle.
        """
        target = None
        if self.target_id is not None:
            target = next((n for n in nodes if n.id == self.target_id), None)
        self.hover(target, nodes)

    def to_dict(self) -> dict:
        return {"state": self.state.value, "target": self.target_id}
