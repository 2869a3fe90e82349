"""
Scene controller - the single writer for scene state.

Owns the post collection, the current filter snapshot, the rendered node
and edge sets, the effect set, the hover state and the camera rig. Every
mutation goes through here, so a renderer never sees a half-updated scene:
reconciliation output replaces the node and edge sets wholesale.
"""

import random
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional

from models import Edge, Effect, FilterState, HighlightLevel, Post, VisualNode, dedupe_batch
from .animation import CameraRig, FrameState, compose_frame, pulsation_scale
from .effects import EFFECT_TTL_MS, EffectManager, now_ms
from .filter_pipeline import apply_filters
from .interaction import InteractionMachine, ray_from_pointer
from .reconciler import ReconcileResult, reconcile


def local_now() -> datetime:
    """Aware wall-clock time in the host's zone; the background follows its hour."""
    return datetime.now().astimezone()


@dataclass
class SceneSnapshot:
    """
    Read-only view of the scene at one instant.

    Nodes are copies, so later hover changes never show through a snapshot
    that is being serialized on another thread.
    """
    nodes: tuple[VisualNode, ...]
    edges: tuple[Edge, ...]
    effects: tuple[Effect, ...]
    now_ms: float
    post_count: int
    filters: FilterState
    interaction: dict

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "effects": [e.to_dict(self.now_ms) for e in self.effects],
            "counts": {"posts": self.post_count, "visible": len(self.nodes)},
            "filters": self.filters.model_dump(mode="json"),
            "interaction": self.interaction,
        }


class SceneController:
    """
    Drives filter -> reconcile -> effect spawn, plus pointer and frame events.

    The host runs the poll worker and request handlers on separate threads,
    so every public method takes the controller lock. Within one call the
    pipeline is strictly sequential.
    """

    def __init__(
        self,
        filters: Optional[FilterState] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = now_ms,
        wall_clock: Callable[[], datetime] = local_now,
        effect_ttl_ms: float = EFFECT_TTL_MS,
        auto_rotate: bool = True,
        aspect: float = 16 / 9,
    ):
        self._lock = threading.RLock()
        self._rng = rng or random.Random()
        self._clock = clock
        self._wall_clock = wall_clock
        self._posts: list[Post] = []
        self._filters = filters or FilterState()
        self._nodes: tuple[VisualNode, ...] = ()
        self._edges: tuple[Edge, ...] = ()
        self._last_frame_ms: Optional[float] = None
        self._closed = False
        self.aspect = aspect
        self.effects = EffectManager(ttl_ms=effect_ttl_ms, clock=clock)
        self.interaction = InteractionMachine()
        self.camera = CameraRig(auto_rotate=auto_rotate)

    # === Data in ===

    def ingest(self, posts: Iterable[Post]) -> Optional[ReconcileResult]:
        """Replace the post collection with a new poll result and resync."""
        with self._lock:
            if self._closed:
                print("[SCENE] Closed, ignoring ingest")
                return None
            self._posts = dedupe_batch(posts)
            print(f"[SCENE] Ingested {len(self._posts)} posts")
            return self._resync()

    def set_filters(self, filters: FilterState) -> Optional[ReconcileResult]:
        """Swap in a new filter snapshot and resync."""
        with self._lock:
            if self._closed:
                return None
            self._filters = filters
            return self._resync()

    def update_filters(self, changes: dict) -> Optional[ReconcileResult]:
        """Merge partial filter changes over the current snapshot."""
        with self._lock:
            return self.set_filters(self._filters.merged(changes))

    def refresh(self) -> Optional[ReconcileResult]:
        """Re-run the pipeline (recency windows move with the clock)."""
        with self._lock:
            if self._closed:
                return None
            return self._resync()

    def _resync(self) -> ReconcileResult:
        visible = apply_filters(self._posts, self._filters, self._wall_clock())
        result = reconcile(self._nodes, visible, self._rng)

        # Expired effects go once per cycle even when no renderer is pulling frames
        now = self._clock()
        self.effects.sweep(now)

        # Highlight before the swap so the new set is complete when published
        self.interaction.reapply(result.nodes)
        self._nodes = tuple(result.nodes)
        self._edges = tuple(result.edges)

        created_ids = {post.id for post in result.created}
        self.effects.spawn_all((n.position for n in result.nodes if n.id in created_ids), now)

        print(f"[SCENE] Reconciled: {result.summary()}")
        return result

    # === Pointer ===

    def pointer_move(self, ndc_x: float, ndc_y: float) -> Optional[VisualNode]:
        """
        Hit test at the pointer and recompute every node's highlight.

        Returns a copy of the hovered node, or None.
        """
        with self._lock:
            ray = ray_from_pointer(ndc_x, ndc_y, self.camera.camera(self.aspect))
            now = self._clock()
            target = self.interaction.pointer_move(
                ray, self._nodes, scale_for=lambda node: pulsation_scale(node, now)
            )
            return target.model_copy() if target else None

    def pointer_leave(self) -> None:
        with self._lock:
            self.interaction.leave(self._nodes)

    def hover_node(self, node_id: Optional[str]) -> Optional[VisualNode]:
        """Hover by id, for renderers that do their own hit testing."""
        with self._lock:
            target = self.node(node_id) if node_id else None
            self.interaction.hover(target, self._nodes)
            return target.model_copy() if target else None

    def drag_start(self) -> None:
        with self._lock:
            self.camera.drag_start()

    def drag_end(self) -> None:
        with self._lock:
            self.camera.drag_end()

    def set_auto_rotate(self, enabled: bool) -> None:
        with self._lock:
            self.camera.set_auto_rotate(enabled)

    # === Frame ===

    def frame(self) -> FrameState:
        """Advance the camera and sweep effects, then collect frame values."""
        with self._lock:
            now = self._clock()
            if self._last_frame_ms is not None:
                self.camera.advance((now - self._last_frame_ms) / 1000)
            self._last_frame_ms = now
            self.effects.sweep(now)
            return compose_frame(self._nodes, self.effects.effects, self.camera, now, self._wall_clock())

    # === Read side ===

    @property
    def nodes(self) -> tuple[VisualNode, ...]:
        return self._nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    @property
    def posts(self) -> list[Post]:
        return list(self._posts)

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def closed(self) -> bool:
        return self._closed

    def node(self, node_id: str) -> Optional[VisualNode]:
        return next((n for n in self._nodes if n.id == node_id), None)

    def highlight_map(self) -> dict[str, HighlightLevel]:
        """Every node's highlight level, read in one piece."""
        with self._lock:
            return {n.id: n.highlight_level for n in self._nodes}

    def snapshot(self) -> SceneSnapshot:
        with self._lock:
            return SceneSnapshot(
                nodes=tuple(n.model_copy() for n in self._nodes),
                edges=self._edges,
                effects=tuple(self.effects.effects),
                now_ms=self._clock(),
                post_count=len(self._posts),
                filters=self._filters,
                interaction=self.interaction.to_dict(),
            )

    # === Lifecycle ===

    def close(self) -> None:
        """Release scene state. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._nodes = ()
            self._edges = ()
            self._posts = []
            self.effects.clear()
            self.interaction = InteractionMachine()
            print("[SCENE] Closed")

    def __enter__(self) -> "SceneController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
