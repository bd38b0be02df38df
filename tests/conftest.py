"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from cloudconvert_client import CloudConvertClient

from tests.helpers import API_KEY


@pytest.fixture
def make_client() -> Callable[..., CloudConvertClient]:
    """Build a client whose requests are answered by `handler`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> CloudConvertClient:
        return CloudConvertClient(API_KEY, transport=httpx.MockTransport(handler), **kwargs)

    return factory


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by a test handler, in order."""
    return []


@pytest.fixture
def sample_conversions():
    """Sample process list as returned by GET /processes."""
    return [
        {
            "id": "abc123",
            "host": "host123d1.cloudconvert.com",
            "step": "finished",
            "url": "//host123d1.cloudconvert.com/process/abc123",
        },
        {
            "id": "def456",
            "host": "host123d2.cloudconvert.com",
            "step": "convert",
            "url": "//host123d2.cloudconvert.com/process/def456",
        },
        {
            "id": "ghi789",
            "host": "host123d1.cloudconvert.com",
            "step": "error",
            "url": "//host123d1.cloudconvert.com/process/ghi789",
        },
    ]
