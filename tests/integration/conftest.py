"""
Integration test fixtures.

Integration tests:
- Test component boundaries
- Use real I/O but to temp locations
- Should be deterministic
"""

import random
import pytest
import tempfile
import shutil
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

from app import create_app
from engine import SceneController
from models import Category, FeedDescriptor, Post, Settings
from workers import FeedPollWorker


NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_dir():
    """Temporary directory for test data."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def settings_path(temp_dir):
    """Settings YAML location."""
    return temp_dir / "feeds.yaml"


@pytest.fixture
def settings():
    return Settings(feeds=[
        FeedDescriptor(url="https://example.com/tech.xml", category=Category.TECHNOLOGY),
        FeedDescriptor(url="https://example.com/health.xml", category=Category.HEALTH),
    ])


@pytest.fixture
def sample_posts():
    return [
        Post(id="1", title="Chip fab opens", link="https://example.com/1",
             published_at=NOW, category=Category.TECHNOLOGY, engagement=50),
        Post(id="2", title="New phone launch", link="https://example.com/2",
             published_at=NOW, category=Category.TECHNOLOGY, engagement=20),
        Post(id="3", title="Flu season peaks", link="https://example.com/3",
             published_at=NOW.replace(day=10), category=Category.HEALTH, engagement=80),
    ]


@pytest.fixture
def fetch(sample_posts):
    """Stands in for the network fetch of every feed."""
    return MagicMock(return_value=sample_posts)


@pytest.fixture
def controller():
    scene = SceneController(rng=random.Random(3), wall_clock=lambda: NOW, aspect=1.0)
    yield scene
    scene.close()


@pytest.fixture
def app(settings, controller, fetch, settings_path):
    worker = FeedPollWorker(controller, settings, source=MagicMock(), fetch=fetch)
    flask_app = create_app(
        settings=settings,
        controller=controller,
        worker=worker,
        start_worker=False,
        settings_path=settings_path,
    )
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def loaded_client(app, client):
    """Client whose scene already holds the sample posts."""
    worker = app.extensions["feedgraph"].worker
    worker.poll_once()
    return client
