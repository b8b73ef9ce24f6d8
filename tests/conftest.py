"""Pytest configuration.

The modules live at the repository root, so the root is put on ``sys.path``
for the test modules.  HTTP traffic is faked with real
:class:`requests.models.Response` objects handed out by :class:`FakeSession`.
"""

import json
import sys
from pathlib import Path

import pytest
from requests.models import Response

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


def build_response(status_code, body):
    resp = Response()
    resp.status_code = status_code
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """Stands in for ``requests``; returns a canned response or raises."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []

    def get(self, url, **kwargs):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def payload():
    return {
        "location": {"name": "London", "country": "United Kingdom", "localtime": "2024-12-01 10:00"},
        "current": {
            "temp_c": 11.0,
            "humidity": 82,
            "condition": {
                "text": "Partly cloudy",
                "icon": "//cdn.weatherapi.com/weather/64x64/day/116.png",
                "code": 1003,
            },
            "air_quality": {
                "co": 230.3,
                "no2": 13.5,
                "o3": 52.9,
                "so2": 3.1,
                "pm2_5": 4.6,
                "pm10": 6.2,
                "us-epa-index": 1,
                "gb-defra-index": 1,
            },
        },
    }


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def fake_session():
    return FakeSession
