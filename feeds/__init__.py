"""
Feed Sources Package.

Add new sources here and they'll be available by name.
"""

from .base import FeedSource, SourceConfig
from .rss2json import Rss2JsonSource
from .xml_feed import XmlFeedSource
from .aggregate import fetch_all
from .parsing import parse_pub_date, record_to_post

# Register all sources
ALL_SOURCES = {
    Rss2JsonSource.name: Rss2JsonSource,
    XmlFeedSource.name: XmlFeedSource,
}


def get_source(name: str, **kwargs) -> FeedSource:
    """Instantiate a source by name. Raises KeyError for unknown names."""
    return ALL_SOURCES[name](**kwargs)


__all__ = [
    "FeedSource",
    "SourceConfig",
    "Rss2JsonSource",
    "XmlFeedSource",
    "fetch_all",
    "parse_pub_date",
    "record_to_post",
    "ALL_SOURCES",
    "get_source",
]
