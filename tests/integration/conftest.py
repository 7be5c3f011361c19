# tests/integration/conftest.py
import pytest


def pytest_collection_modifyitems(items):
    """Mark everything under tests/integration, so -m integration selects the HTTP and entry point tests."""
    for item in items:
        if item.path.parent.name == "integration":
            item.add_marker(pytest.mark.integration)
