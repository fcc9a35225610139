import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import engine`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def isolated_signal_env(monkeypatch):
    """Keep a developer's .env or shell settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("SIGNAL_"):
            monkeypatch.delenv(name)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
