"""
Configuration and shared settings for the feed graph service.
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import ValidationError

from models import Settings

# Load .env - local first
load_dotenv()

FEEDS_CONFIG = Path(os.environ.get("FEEDGRAPH_FEEDS_CONFIG", "feeds.yaml"))
POLL_INTERVAL = float(os.environ.get("FEEDGRAPH_POLL_INTERVAL", "60"))  # seconds
FEED_SOURCE = os.environ.get("FEEDGRAPH_SOURCE", "rss2json")  # 'rss2json' | 'xml'
PORT = int(os.environ.get("FEEDGRAPH_PORT", "5001"))
AUTOSTART_POLLER = os.environ.get("FEEDGRAPH_AUTOSTART", "1") not in ("0", "false", "no")


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load feed settings from YAML.

    Missing file -> built-in defaults. Unreadable or invalid file -> logged,
    then defaults, so a bad edit never keeps the service from starting.
    """
    path = path or FEEDS_CONFIG
    if not path.exists():
        return Settings()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return Settings.model_validate(data)
    except (yaml.YAMLError, ValidationError, OSError) as e:
        print(f"[CONFIG] Invalid settings in {path}, using defaults: {e}")
        return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    """Save feed settings to YAML."""
    path = path or FEEDS_CONFIG
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
