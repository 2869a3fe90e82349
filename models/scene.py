"""
Scene records - what the renderer draws.

VisualNode, Edge and Effect are derived from posts; none of them is
persisted and none outlives the pass that produced it.
"""

from datetime import date
from enum import Enum
from pydantic import BaseModel, Field, model_validator

from .base import BaseRecord
from .post import Category, Post


class Vector3(BaseModel):
    """A point in scene space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)


class HighlightLevel(str, Enum):
    """Pointer-driven emphasis of a node."""
    DIM = "dim"
    NORMAL = "normal"
    SELECTED = "selected"

    @property
    def intensity(self) -> float:
        """Emissive intensity a renderer should use for this level."""
        return _INTENSITY[self]


_INTENSITY = {
    HighlightLevel.DIM: 0.3,
    HighlightLevel.NORMAL: 0.7,
    HighlightLevel.SELECTED: 1.0,
}


class VisualNode(BaseRecord):
    """
    Rendered representation of one post.

    The node references its post, it does not own it. Position is assigned
    once when the node is created and carried unchanged afterwards.
    """
    post: Post
    position: Vector3
    radius: float = Field(gt=0.0)
    category: Category
    highlight_level: HighlightLevel = HighlightLevel.DIM

    @property
    def id(self) -> str:
        return self.post.id

    @property
    def day(self) -> date:
        return self.post.day

    def is_related(self, other: "VisualNode") -> bool:
        """Shares a category or a calendar day of publication."""
        return self.category == other.category or self.day == other.day

    def to_dict(self) -> dict:
        """Export for API responses."""
        return {
            "id": self.id,
            "title": self.post.title,
            "link": self.post.link,
            "published_at": self.post.published_at.isoformat(),
            "engagement": self.post.engagement,
            "category": self.category.value,
            "position": self.position.as_tuple(),
            "radius": self.radius,
            "highlight": self.highlight_level.value,
            "intensity": self.highlight_level.intensity,
        }


class Edge(BaseModel):
    """
    Undirected relation between two nodes.

    Endpoints are stored in sorted order, so Edge(a, b) == Edge(b, a).
    """
    source_id: str
    target_id: str
    shared_category: bool = False
    shared_day: bool = False

    @model_validator(mode="before")
    @classmethod
    def _order_endpoints(cls, data):
        if isinstance(data, dict):
            a, b = data.get("source_id"), data.get("target_id")
            if a is not None and b is not None and b < a:
                data = {**data, "source_id": b, "target_id": a}
        return data

    @model_validator(mode="after")
    def _reject_self_edge(self) -> "Edge":
        if self.source_id == self.target_id:
            raise ValueError(f"self-edge on {self.source_id}")
        return self

    @property
    def key(self) -> tuple[str, str]:
        return (self.source_id, self.target_id)

    def touches(self, node_id: str) -> bool:
        return node_id in self.key

    def to_dict(self) -> dict:
        return {
            "source": self.source_id,
            "target": self.target_id,
            "shared_category": self.shared_category,
            "shared_day": self.shared_day,
        }


class Effect(BaseModel):
    """
    Short-lived burst marking a freshly created node.

    Times are epoch milliseconds. An effect carries no identity beyond its
    own lifetime and is never matched back to a post.
    """
    position: Vector3
    created_at: float
    ttl_ms: float = 2000.0

    def age(self, now: float) -> float:
        return now - self.created_at

    def expired(self, now: float) -> bool:
        return self.age(now) >= self.ttl_ms

    def to_dict(self, now: float) -> dict:
        return {
            "position": self.position.as_tuple(),
            "age_ms": max(0.0, self.age(now)),
            "ttl_ms": self.ttl_ms,
        }
