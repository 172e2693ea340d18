"""Shared fixtures for poeditor-sync tests."""

import pytest

from poeditor_sync.config import SyncConfig
from poeditor_sync.exceptions import RemoteAPIError


class FakeExportClient:
    """Stands in for RemoteExportClient, keyed by remote language code."""

    def __init__(self, contents=None, failures=None):
        self.contents = contents or {}
        self.failures = failures or {}
        self.requests = []

    async def export(self, request):
        self.requests.append(request)
        if request.language in self.failures:
            code, message = self.failures[request.language]
            raise RemoteAPIError(code, message)
        return self.contents.get(request.language, "")


@pytest.fixture
def make_config():
    def factory(**overrides):
        values = {
            "api_key": "token",
            "project_id": "12345",
            "type": "apple_strings",
            "languages": ["en", "fr"],
            "path": "Resources/{LANGUAGE}/Strings",
        }
        values.update(overrides)
        return SyncConfig(**values)

    return factory


@pytest.fixture
def fake_client():
    return FakeExportClient


@pytest.fixture
def make_files(tmp_path):
    """Create placeholder destination files relative to tmp_path."""

    def factory(*relative_paths, content="placeholder\n"):
        created = []
        for relative in relative_paths:
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            created.append(path)
        return created

    return factory
