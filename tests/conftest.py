"""
Shared fixtures for the web tracker tests.

HTTP goes through a MagicMock standing in for requests.Session and time
comes from a manual clock, so nothing here touches the network.
"""
import os
import sys
import tempfile
from pathlib import Path

# Keep test runs from writing into the real per-user log directory
os.environ.setdefault("SHIDU_LOG_DIR", tempfile.mkdtemp(prefix="shidu-test-logs-"))

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from unittest.mock import MagicMock

import pytest
import requests

from .helpers import ManualClock, make_response


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.post.return_value = make_response(200, {})
    return s
