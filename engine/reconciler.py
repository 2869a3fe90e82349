"""
Reconciler - diff the rendered node set against a new visible post set.

Decides which nodes are created, carried forward, or dropped, assigns
positions to new nodes, and derives the edge set from scratch.
"""

import random
from collections import defaultdict
from dataclasses import dataclass, field
from itertools import combinations
from typing import Optional, Sequence

from models import Category, Edge, Post, Vector3, VisualNode, dedupe_batch


# One anchor per category, one per quadrant of the z=0 plane
CATEGORY_ANCHORS: dict[Category, Vector3] = {
    Category.TECHNOLOGY: Vector3(x=-50, y=50, z=0),
    Category.BUSINESS: Vector3(x=50, y=50, z=0),
    Category.SCIENCE: Vector3(x=-50, y=-50, z=0),
    Category.HEALTH: Vector3(x=50, y=-50, z=0),
}

# Per-axis jitter half-width, same for every category
JITTER = 20.0

# radius = engagement / ENGAGEMENT_SCALE * RADIUS_SPAN + MIN_RADIUS
ENGAGEMENT_SCALE = 100.0
RADIUS_SPAN = 3.0
MIN_RADIUS = 1.0


@dataclass
class ReconcileResult:
    """Output of one reconciliation pass."""
    nodes: list[VisualNode]
    edges: list[Edge]
    created: list[Post]
    destroyed_ids: list[str] = field(default_factory=list)

    @property
    def retained_count(self) -> int:
        return len(self.nodes) - len(self.created)

    def summary(self) -> str:
        return (
            f"{len(self.nodes)} nodes (+{len(self.created)} created, "
            f"-{len(self.destroyed_ids)} destroyed), {len(self.edges)} edges"
        )


def radius_for(engagement: float) -> float:
    """Monotonic in engagement, never below MIN_RADIUS."""
    return max(engagement, 0.0) / ENGAGEMENT_SCALE * RADIUS_SPAN + MIN_RADIUS


def position_for(category: Category, rng: random.Random) -> Vector3:
    """Category anchor plus uniform jitter on each axis."""
    jitter = Vector3(
        x=rng.uniform(-JITTER, JITTER),
        y=rng.uniform(-JITTER, JITTER),
        z=rng.uniform(-JITTER, JITTER),
    )
    return CATEGORY_ANCHORS[category] + jitter


def derive_edges(nodes: Sequence[VisualNode]) -> list[Edge]:
    """
    Every unordered pair of distinct nodes sharing a category or a day.

    Nodes are bucketed by category and by day first, so only pairs that can
    possibly be related get compared. Output is ordered by node position in
    the input.
    """
    buckets: dict[tuple, list[int]] = defaultdict(list)
    for index, node in enumerate(nodes):
        buckets[("category", node.category)].append(index)
        buckets[("day", node.day)].append(index)

    pairs: set[tuple[int, int]] = set()
    for members in buckets.values():
        pairs.update(combinations(members, 2))

    edges = []
    for i, j in sorted(pairs):
        a, b = nodes[i], nodes[j]
        if a.id == b.id:
            continue
        edges.append(Edge(
            source_id=a.id,
            target_id=b.id,
            shared_category=a.category == b.category,
            shared_day=a.day == b.day,
        ))
    return edges


def _create_node(post: Post, rng: random.Random) -> VisualNode:
    return VisualNode(
        post=post,
        position=position_for(post.category, rng),
        radius=radius_for(post.engagement),
        category=post.category,
    )


def _carry_forward(node: VisualNode, post: Post) -> VisualNode:
    # Fresh node for the new pass; position is the one thing never recomputed
    return VisualNode(
        post=post,
        position=node.position,
        radius=radius_for(post.engagement),
        category=post.category,
    )


def reconcile(
    previous: Sequence[VisualNode],
    new_visible: Sequence[Post],
    rng: Optional[random.Random] = None,
) -> ReconcileResult:
    """
    Reconcile the previously rendered nodes against a new visible post set.

    Posts whose id was already rendered keep their node position. Posts with
    a new id get a freshly placed node and are reported in `created`. Nodes
    whose id is absent from `new_visible` are dropped.

    Total and side-effect free: `previous` is not mutated, and empty input
    yields empty output.

    Args:
        previous: Nodes from the last pass
        new_visible: Filtered posts, in arrival order
        rng: Random source for jitter (module RNG if None)

    Returns:
        ReconcileResult with the complete replacement node and edge sets
    """
    rng = rng or random.Random()
    previous_by_id = {node.id: node for node in previous}

    nodes: list[VisualNode] = []
    created: list[Post] = []
    for post in dedupe_batch(new_visible):
        existing = previous_by_id.get(post.id)
        if existing is not None:
            nodes.append(_carry_forward(existing, post))
        else:
            nodes.append(_create_node(post, rng))
            created.append(post)

    kept_ids = {node.id for node in nodes}
    destroyed_ids = [node_id for node_id in previous_by_id if node_id not in kept_ids]

    return ReconcileResult(
        nodes=nodes,
        edges=derive_edges(nodes),
        created=created,
        destroyed_ids=destroyed_ids,
    )
