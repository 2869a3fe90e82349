"""
rss2json Source - RSS/Atom feeds converted to JSON by api.rss2json.com.

Optional:
  RSS2JSON_API_KEY  (lifts the anonymous rate limit)
"""

import requests

from models import FeedDescriptor
from .base import FeedSource, SourceConfig


RSS2JSON_ENDPOINT = "https://api.rss2json.com/v1/api.json"


class Rss2JsonSource(FeedSource):
    name = 'rss2json'
    description = 'Any RSS/Atom feed, via the rss2json conversion API'

    def _default_config(self) -> SourceConfig:
        return SourceConfig(timeout=15, max_items=100)

    def fetch_records(self, feed: FeedDescriptor) -> list[dict]:
        params = {"rss_url": feed.url}
        api_key = self.get_env("RSS2JSON_API_KEY")
        if api_key:
            params["api_key"] = api_key

        r = requests.get(
            RSS2JSON_ENDPOINT,
            params=params,
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout,
        )
        r.raise_for_status()
        data = r.json()

        if not isinstance(data, dict):
            print(f"[{self.name}] Invalid feed data for {feed.url}: not an object")
            return []

        items = data.get("items")
        if data.get("status") != "ok" or not isinstance(items, list):
            print(f"[{self.name}] Invalid feed data for {feed.url}: {data.get('message') or data.get('status')}")
            return []

        return [item for item in items if isinstance(item, dict)]
