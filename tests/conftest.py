"""
pytest configuration
Shared fixtures for clipfinder tests
"""

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from clipfinder.app import create_app
from clipfinder.recognition import RecognitionGateway
from clipfinder.recognition.providers.mock import MockRecognitionProvider
from clipfinder.settings import AcrCloudSettings, ServerSettings, Settings, UploadSettings


def make_settings(*, access_key: str | None = "key", access_secret: str | None = "secret", **acr: Any) -> Settings:
    return Settings(
        server=ServerSettings(
            host="127.0.0.1",
            port=3001,
            cors_allow_origins=("*",),
            static_dir=None,
            log_level="INFO",
        ),
        acrcloud=AcrCloudSettings(
            host=acr.get("host", "identify-us-west-2.acrcloud.com"),
            access_key=access_key,
            access_secret=access_secret,
            timeout_ms=acr.get("timeout_ms", 10000),
        ),
        upload=UploadSettings(max_bytes=10 * 1024 * 1024),
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def unconfigured_settings() -> Settings:
    return make_settings(access_key=None, access_secret=None)


@pytest.fixture
def matched_response() -> Dict[str, Any]:
    return {
        "status": {"code": 0, "msg": "Success", "version": "1.0"},
        "metadata": {
            "music": [
                {
                    "title": "Blinding Lights",
                    "artists": [{"name": "The Weeknd"}, {"name": "Someone Else"}],
                    "album": {"name": "After Hours"},
                    "duration_ms": 200040,
                    "release_date": "2019-11-29",
                    "genres": [{"name": "Pop"}, {"name": "R&B"}],
                    "external_ids": {"isrc": "USUG11904206"},
                    "score": 100,
                }
            ]
        },
        "cost_time": 0.7,
    }


@pytest.fixture
def no_match_response() -> Dict[str, Any]:
    return {"status": {"code": 1001, "msg": "No result", "version": "1.0"}}


@pytest.fixture
def mock_provider(matched_response) -> MockRecognitionProvider:
    return MockRecognitionProvider(matched_response)


@pytest.fixture
def gateway(mock_provider) -> RecognitionGateway:
    return RecognitionGateway(provider=mock_provider, timeout_seconds=1.0, host="identify-us-west-2.acrcloud.com")


@pytest.fixture
def client(settings, gateway) -> TestClient:
    return TestClient(create_app(settings, gateway=gateway))


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")

