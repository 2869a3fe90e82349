"""
Engine - keep the 3D post graph in sync with the feeds and the filters.

The flow: POLL -> FILTER -> RECONCILE -> SPAWN EFFECTS, with pointer
events and animation frames interleaved on the same scene state.

Modules:
- filter_pipeline: Reduce posts to the visible subset
- reconciler: Create/retain/destroy nodes, place them, derive edges
- effects: Transient bursts for newly created nodes
- interaction: Pointer hit testing and hover highlight state
- animation: Pulsation, background color, camera auto-rotation
- scene_controller: Single writer tying it all together
"""

from .filter_pipeline import apply_filters, passes, matches_search, within_window
from .reconciler import (
    ReconcileResult,
    reconcile,
    derive_edges,
    radius_for,
    position_for,
    CATEGORY_ANCHORS,
)
from .effects import EffectManager, EFFECT_TTL_MS
from .interaction import (
    Camera,
    Ray,
    InteractionMachine,
    InteractionState,
    ray_from_pointer,
    hit_test,
    compute_highlights,
)
from .animation import CameraRig, FrameState, pulsation_scale, background_color, lerp_color
from .scene_controller import SceneController, SceneSnapshot

__all__ = [
    # filter_pipeline
    "apply_filters",
    "passes",
    "matches_search",
    "within_window",
    # reconciler
    "ReconcileResult",
    "reconcile",
    "derive_edges",
    "radius_for",
    "position_for",
    "CATEGORY_ANCHORS",
    # effects
    "EffectManager",
    "EFFECT_TTL_MS",
    # interaction
    "Camera",
    "Ray",
    "InteractionMachine",
    "InteractionState",
    "ray_from_pointer",
    "hit_test",
    "compute_highlights",
    # animation
    "CameraRig",
    "FrameState",
    "pulsation_scale",
    "background_color",
    "lerp_color",
    # scene_controller
    "SceneController",
    "SceneSnapshot",
]
