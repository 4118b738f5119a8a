import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the in-memory feed and push adapters so that nothing in the
    suite reaches Firebase unless a test asks for it explicitly.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["ENVIRONMENT"] = session.config.option.env
    os.environ["ANNOUNCEMENTS_ADAPTER"] = "fake"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Drop adapter singletons after every test."""
    yield

    from announcements.channel import reset_channels
    from announcements.feed import reset_feed

    reset_channels()
    reset_feed()
