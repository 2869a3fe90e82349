"""
Scene API routes - scene state, frames, filters and pointer/drag events.
"""

from flask import jsonify
from pydantic import ValidationError

from engine import EFFECT_TTL_MS
from engine.animation import EDGE_COLOR, EDGE_OPACITY, EFFECT_COLOR, color_hex
from models import CATEGORY_COLORS, HighlightLevel
from . import scene_bp
from .helpers import error, get_state, json_body, parse_float


@scene_bp.route("/api/scene")
def get_scene():
    """Current nodes, edges, counts and hover state."""
    return jsonify(get_state().controller.snapshot().to_dict())


@scene_bp.route("/api/frame")
def get_frame():
    """Per-frame values: pulsation scales, background, camera, effects."""
    return jsonify(get_state().controller.frame().to_dict())


@scene_bp.route("/api/filters", methods=["GET"])
def get_filters():
    return jsonify(get_state().controller.filters.model_dump(mode="json"))


@scene_bp.route("/api/filters", methods=["PUT"])
def update_filters():
    """Merge filter changes and resync the scene."""
    data = json_body()
    if not data:
        return error("No data provided")

    controller = get_state().controller
    try:
        result = controller.update_filters(data)
    except (ValidationError, ValueError) as e:
        return error(f"Invalid filters: {e}")

    return jsonify({
        "filters": controller.filters.model_dump(mode="json"),
        "visible": len(result.nodes) if result else 0,
        "created": [p.id for p in result.created] if result else [],
        "destroyed": result.destroyed_ids if result else [],
    })


@scene_bp.route("/api/pointer", methods=["POST"])
def pointer_move():
    """
    Pointer moved. Body: {x, y} in normalized device coordinates, or
    {node_id} when the renderer did its own hit test.
    """
    data = json_body()
    controller = get_state().controller

    if "node_id" in data:
        target = controller.hover_node(data.get("node_id"))
    else:
        try:
            target = controller.pointer_move(parse_float(data, "x"), parse_float(data, "y"))
        except ValueError as e:
            return error(str(e))

    return jsonify({
        "hovered": target.to_dict() if target else None,
        "highlights": {node_id: level.value for node_id, level in controller.highlight_map().items()},
    })


@scene_bp.route("/api/pointer/leave", methods=["POST"])
def pointer_leave():
    controller = get_state().controller
    controller.pointer_leave()
    return jsonify({"hovered": None})


@scene_bp.route("/api/drag/start", methods=["POST"])
def drag_start():
    state = get_state()
    state.controller.drag_start()
    return jsonify(state.controller.camera.to_dict())


@scene_bp.route("/api/drag/end", methods=["POST"])
def drag_end():
    state = get_state()
    state.controller.drag_end()
    return jsonify(state.controller.camera.to_dict())


@scene_bp.route("/api/legend")
def legend():
    """Category -> color."""
    return jsonify({category.value: color_hex(color) for category, color in CATEGORY_COLORS.items()})


@scene_bp.route("/api/scene/refresh", methods=["POST"])
def refresh_scene():
    """Re-run filters without polling; recency windows move with the clock."""
    result = get_state().controller.refresh()
    return jsonify({
        "visible": len(result.nodes) if result else 0,
        "destroyed": result.destroyed_ids if result else [],
    })


@scene_bp.route("/api/style")
def style():
    """Static render constants: camera lens, highlight intensities, edge and effect colors."""
    camera = get_state().controller.camera.camera()
    return jsonify({
        "camera": {"fov": camera.fov_deg, "near": camera.near, "far": camera.far},
        "highlight": {level.value: level.intensity for level in HighlightLevel},
        "edge": {"color": color_hex(EDGE_COLOR), "opacity": EDGE_OPACITY},
        "effect": {"color": color_hex(EFFECT_COLOR), "ttl_ms": EFFECT_TTL_MS},
    })
