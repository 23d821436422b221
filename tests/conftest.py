import os

import pytest

# Keep transport defaults short so a test that reaches the network fails fast
os.environ.setdefault("TRANSPORT_CONNECT_TIMEOUT", "1")


@pytest.fixture(autouse=True)
def _concise_logging(monkeypatch):
    """Log formatting depends on DEBUG; tests opt in explicitly."""
    monkeypatch.delenv("DEBUG", raising=False)
