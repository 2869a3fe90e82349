"""
Settings API routes - feed list, auto-rotate, worker stats.

Feed list changes are saved to the settings YAML and trigger an
immediate poll.
"""

from flask import jsonify
from pydantic import ValidationError

import config
from models import FeedDescriptor
from . import settings_bp
from .helpers import error, get_state, json_body


def _persist(state) -> None:
    try:
        config.save_settings(state.settings, state.settings_path)
    except OSError as e:
        print(f"[SETTINGS] Could not save settings: {e}")


def _poll_now(state) -> bool:
    if state.worker is None:
        return False
    return state.worker.poll_now()


@settings_bp.route("/api/settings", methods=["GET"])
def get_settings():
    state = get_state()
    return jsonify({
        **state.settings.to_dict(),
        "rotating": state.controller.camera.rotating,
    })


@settings_bp.route("/api/settings/auto-rotate", methods=["PUT"])
def set_auto_rotate():
    data = json_body()
    enabled = data.get("enabled")
    if not isinstance(enabled, bool):
        return error("'enabled' must be true or false")

    state = get_state()
    state.settings.auto_rotate = enabled
    state.controller.set_auto_rotate(enabled)
    _persist(state)
    return jsonify({"auto_rotate": enabled})


@settings_bp.route("/api/settings/feeds", methods=["POST"])
def add_feed():
    """Add a feed. Body: {url, category}."""
    data = json_body()
    try:
        feed = FeedDescriptor.model_validate(data)
    except ValidationError as e:
        return error(f"Invalid feed: {e}")

    state = get_state()
    state.settings.add_feed(feed)
    _persist(state)
    polling = _poll_now(state)
    print(f"[SETTINGS] Added feed {feed.url} ({feed.category.value})")
    return jsonify({"feeds": [f.to_dict() for f in state.settings.feeds], "polling": polling})


@settings_bp.route("/api/settings/feeds/<int:index>", methods=["DELETE"])
def remove_feed(index):
    state = get_state()
    try:
        removed = state.settings.remove_feed(index)
    except IndexError:
        return error("Not found", 404)

    _persist(state)
    polling = _poll_now(state)
    print(f"[SETTINGS] Removed feed {removed.url}")
    return jsonify({"feeds": [f.to_dict() for f in state.settings.feeds], "polling": polling})


@settings_bp.route("/api/settings/refresh", methods=["POST"])
def refresh():
    """Poll now, outside the regular interval."""
    state = get_state()
    return jsonify({"polling": _poll_now(state)})


@settings_bp.route("/api/workers")
def workers():
    state = get_state()
    return jsonify({"feed_poller": state.worker.get_stats() if state.worker else None})
