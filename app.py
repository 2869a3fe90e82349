#!/usr/bin/env python3
"""
Feed Graph Web Service

Flask app that keeps the 3D post graph in sync with the feeds and serves
it to a browser renderer.
"""

import atexit
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify

import config
from engine import SceneController
from feeds import get_source
from models import Settings
from routes import scene_bp, settings_bp
from routes.helpers import EXTENSION_KEY, AppState
from workers import FeedPollWorker


def create_app(
    settings: Optional[Settings] = None,
    controller: Optional[SceneController] = None,
    worker: Optional[FeedPollWorker] = None,
    start_worker: bool = True,
    settings_path: Optional[Path] = None,
) -> Flask:
    """
    Build the app and wire scene state into it.

    Args:
        settings: Feed settings (loaded from YAML if None)
        controller: Scene controller (fresh one if None)
        worker: Poll worker (built from config if None)
        start_worker: Start polling immediately
        settings_path: Where settings edits are saved
    """
    settings = settings or config.load_settings(settings_path)
    controller = controller or SceneController(auto_rotate=settings.auto_rotate)
    if worker is None:
        worker = FeedPollWorker(
            controller,
            settings,
            get_source(config.FEED_SOURCE),
            interval=config.POLL_INTERVAL,
        )

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = AppState(
        controller=controller,
        settings=settings,
        worker=worker,
        settings_path=settings_path,
    )
    app.register_blueprint(scene_bp)
    app.register_blueprint(settings_bp)

    @app.route("/")
    def index():
        snapshot = controller.snapshot()
        return jsonify({
            "service": "feedgraph",
            "posts": snapshot.post_count,
            "visible": len(snapshot.nodes),
            "polling": worker.is_running(),
        })

    if start_worker:
        worker.start()

    atexit.register(shutdown, app)
    return app


def shutdown(app: Flask) -> None:
    """Stop polling and release scene state. Idempotent."""
    state: AppState = app.extensions[EXTENSION_KEY]
    if state.worker is not None and state.worker.is_running():
        state.worker.stop()
    state.controller.close()


app = create_app(start_worker=config.AUTOSTART_POLLER)


if __name__ == "__main__":
    print("\n" + "="*60)
    print("  Feed Graph Web Service")
    print("="*60)
    print(f"  Open http://localhost:{config.PORT} in your browser")
    print(f"  Polling every {config.POLL_INTERVAL:.0f}s via {config.FEED_SOURCE}")
    print("="*60 + "\n")
    try:
        # Reloader would start a second poller in the child process
        app.run(debug=True, port=config.PORT, use_reloader=False)
    finally:
        shutdown(app)
