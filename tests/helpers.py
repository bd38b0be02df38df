"""Shared test constants."""

from __future__ import annotations

API_KEY = "test-api-key"
API_BASE = "https://api.cloudconvert.com/"
