"""
Shared route helpers - app state lookup and request parsing.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from flask import current_app, jsonify, request

from engine import SceneController
from models import Settings
from workers import FeedPollWorker


EXTENSION_KEY = "feedgraph"


@dataclass
class AppState:
    """Everything the handlers share, injected by create_app()."""
    controller: SceneController
    settings: Settings
    worker: Optional[FeedPollWorker] = None
    settings_path: Optional[Path] = None


def get_state() -> AppState:
    return current_app.extensions[EXTENSION_KEY]


def json_body() -> dict:
    """Request JSON as a dict; anything else becomes an empty dict."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def parse_float(data: dict, key: str) -> float:
    """Read a numeric field. Raises ValueError with a client-facing message."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number")
    return float(value)
