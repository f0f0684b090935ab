"""
Shared fixtures for the Incapsula client tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.incapsula.incapsula_types import IncapsulaResponse


def make_response(body, status=200, operation=""):
    """IncapsulaResponse from a dict (JSON-encoded) or a raw string."""
    text = body if isinstance(body, str) else json.dumps(body)
    return IncapsulaResponse(status=status, text=text, operation=operation)


def make_page(start, count, res=0):
    """One listSubAccounts response holding `count` entries with ids start..start+count-1."""
    return make_response({
        "res": res,
        "resultList": [
            {"sub_account_id": i, "sub_account_name": f"sub-{i}", "parent_id": 100}
            for i in range(start, start + count)
        ],
    })


@pytest.fixture
def mock_http():
    """Transport double with credentials set and an AsyncMock post_form."""
    http = MagicMock()
    http.api_id = "12345"
    http.api_key = "secret-key"
    http.post_form = AsyncMock()
    return http
