"""
Root test configuration.

Test organization:
- unit/        Pure engine, models, feeds and workers; fixed clocks, seeded rngs
- integration/ Flask test client against a real controller and poller

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest -m integration -v       # HTTP surface only
    pytest tests -v                # Everything
"""

import os
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Importing app must never start a real poller during tests
os.environ["FEEDGRAPH_AUTOSTART"] = "0"

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")


def pytest_collection_modifyitems(config, items):
    """Mark tests by directory so -m unit / -m integration work without decorators."""
    for item in items:
        parts = Path(str(item.fspath)).parts
        if "integration" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def benchmark(request):
    """
    Time a call and print it (visible with pytest -s).

    Usage:
        result = benchmark(reconcile, [], posts, rng)
    """
    def run(fn, *args, **kwargs):
        start = time.perf_counter()
        result = fn(*args, **kwargs)
        elapsed = time.perf_counter() - start
        print(f"\n  [{request.node.name}] {fn.__name__}: {elapsed*1000:.2f}ms")
        return result

    return run
