import logging

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def peaked():
    """8 bins, two tall central bins (modes [3,4], gaps [0,2] and [5,7])."""
    return [1, 1, 1, 50, 50, 1, 1, 1]


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch):
    monkeypatch.delenv("MATVIEW_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MATVIEW_LOG_FORMAT", raising=False)
    root = logging.getLogger()
    pkg = logging.getLogger("matview")
    saved = (list(root.handlers), root.level, list(pkg.handlers), pkg.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    pkg.handlers[:] = saved[2]
    pkg.setLevel(saved[3])
