"""
Flask blueprints for the feed graph API.

A browser renderer polls /api/scene and /api/frame and posts pointer,
drag and filter events back.
"""

from flask import Blueprint

# Create blueprints
scene_bp = Blueprint('scene', __name__)
settings_bp = Blueprint('settings', __name__)
# Import routes to register them
from . import scene
from . import settings
