"""
Root conftest.py: Shared Pytest fixtures.

Provides fixtures for:
- Raw template and version records as the service returns them.
- Mocked HTTP responses and sessions for the REST transport.
- A mocked transport for the service facade.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests

from remote_config.api_client.client import RemoteConfigApiClient
from remote_config.config.settings import ClientSettings


# ---------------------------------------------------------------------------
# Record Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def version_record() -> Dict[str, Any]:
    """Return a version record in the shape the REST API returns."""
    return {
        "versionNumber": "86",
        "updateTime": "2020-11-30T22:38:16.421Z",
        "updateOrigin": "ADMIN_SDK_NODE",
        "updateType": "INCREMENTAL_UPDATE",
        "updateUser": {"email": "firebase-user@account.com"},
        "description": "production version",
    }


@pytest.fixture
def template_record(version_record: Dict[str, Any]) -> Dict[str, Any]:
    """Return a full template record, etag included."""
    return {
        "conditions": [
            {
                "name": "ios",
                "expression": "device.os == 'ios'",
                "tagColor": "BLUE",
            },
        ],
        "parameters": {
            "holiday_promo_enabled": {
                "defaultValue": {"value": "false"},
                "conditionalValues": {"ios": {"useInAppDefault": True}},
                "description": "this is a promo",
                "valueType": "BOOLEAN",
            },
        },
        "parameterGroups": {
            "new_menu": {
                "description": "New Menu",
                "parameters": {
                    "pumpkin_spice_season": {
                        "defaultValue": {"value": "true"},
                        "description": "Whether it's currently pumpkin spice season.",
                    },
                },
            },
        },
        "etag": "etag-123456789012-5",
        "version": version_record,
    }


# ---------------------------------------------------------------------------
# HTTP Fixtures
# ---------------------------------------------------------------------------


def make_response(
    body: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> MagicMock:
    """Build a mocked requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers if headers is not None else {}
    response.json.return_value = body
    response.text = json.dumps(body)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


@pytest.fixture
def response_factory() -> Callable[..., MagicMock]:
    """Expose make_response to tests."""
    return make_response


@pytest.fixture
def settings() -> ClientSettings:
    """Return client settings for a test project."""
    return ClientSettings(project_id="test-project", access_token="test-token")


@pytest.fixture
def session() -> MagicMock:
    """Return a mocked requests session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api_client(settings: ClientSettings, session: MagicMock) -> RemoteConfigApiClient:
    """Return a REST client bound to the mocked session."""
    return RemoteConfigApiClient(settings, session=session)


@pytest.fixture
def transport() -> MagicMock:
    """Return a mocked transport for the service facade."""
    return MagicMock(spec=RemoteConfigApiClient)
