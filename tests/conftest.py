"""
Shared pytest fixtures for setlist-relay tests.

The upstream provider is faked with ``httpx.MockTransport`` so no test talks to
the network. ``upstream`` records every request the relay sends and answers
with whatever the test configured.
"""

import dataclasses
import io
import wave
from typing import Any, Callable, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from setlist_relay.app import AppContext, create_app
from setlist_relay.audio import AudioIngestor, IngestLimits
from setlist_relay.recognition import RecognitionService
from setlist_relay.recognition.providers import AudioTagProvider
from setlist_relay.settings import (
    AudioTagSettings,
    RecognitionSettings,
    ServerSettings,
    Settings,
)

TEST_API_URL = "https://audiotag.test/api"
TEST_API_TOKEN = "test-token"


def make_settings(**server_overrides: Any) -> Settings:
    server = ServerSettings(
        host="127.0.0.1",
        port=3000,
        log_level="INFO",
        max_upload_bytes=25 * 1024 * 1024,
        cors_origins=("*",),
    )
    return Settings(
        server=dataclasses.replace(server, **server_overrides),
        recognition=RecognitionSettings(
            provider="audiotag",
            audiotag=AudioTagSettings(api_url=TEST_API_URL, api_token=TEST_API_TOKEN, timeout=5.0),
            mock_match=True,
        ),
    )


class FakeUpstream:
    """Programmable stand-in for the AudioTag endpoint."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.bodies: List[bytes] = []
        self.status_code = 200
        self.json_body: Any = {}
        self.text_body: Optional[str] = None
        self.error: Optional[Callable[[httpx.Request], Exception]] = None

    def respond_json(self, body: Any, status_code: int = 200) -> None:
        self.json_body = body
        self.text_body = None
        self.status_code = status_code

    def respond_text(self, text: str, status_code: int) -> None:
        self.text_body = text
        self.status_code = status_code

    def fail_with(self, factory: Callable[[httpx.Request], Exception]) -> None:
        self.error = factory

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        if self.error is not None:
            raise self.error(request)
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def audiotag_provider(upstream) -> AudioTagProvider:
    return AudioTagProvider(
        api_url=TEST_API_URL,
        api_token=TEST_API_TOKEN,
        timeout=5.0,
        transport=upstream.transport(),
    )


@pytest.fixture
def app_factory(audiotag_provider):
    """Build an app around the fake upstream, optionally with different server settings."""

    def _build(**server_overrides: Any):
        settings = make_settings(**server_overrides)
        context = AppContext(
            settings=settings,
            ingestor=AudioIngestor(limits=IngestLimits(max_bytes=settings.server.max_upload_bytes)),
            recognition=RecognitionService(provider=audiotag_provider),
        )
        return create_app(context=context)

    return _build


@pytest.fixture
def client(app_factory):
    with TestClient(app_factory()) as test_client:
        yield test_client


@pytest.fixture
def wav_bytes() -> bytes:
    """A minimal valid WAV file: 1 second of mono silence at 22050 Hz."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(22050)
        wf.writeframes(b"\x00" * 22050 * 2)
    return buffer.getvalue()
