import asyncio
import httpx
import pytest

from inflio.core.common.enums import SubtitleFormat
from inflio.core.exceptions import ContentApiError
from inflio.features.content_api.data.http_client import ContentApiClient
from inflio.features.content_api.domain.interfaces import IContentApi
from inflio.features.content_api.service.api import load_transcription
from inflio.features.content_api.service.scope import RequestScope
from inflio.features.transcript.domain.models import Transcription

PAYLOAD = {
    "text": "Hello world. Bye.",
    "language": "en",
    "duration": 4.0,
    "segments": [
        {"id": 0, "text": " Hello world.", "start": 0.0, "end": 2.0},
        {"id": 1, "text": "Bye.", "start": 2.0, "end": 4.0},
    ],
}

def _client(handler) -> ContentApiClient:
    return ContentApiClient(base_url="http://backend.test", transport=httpx.MockTransport(handler))

async def _fetch(handler, project_id="proj-1"):
    async with _client(handler) as client:
        return await client.fetch_transcription(project_id)

# --- HTTP CLIENT ---

def test_fetch_transcription_parses_payload():
    seen = []

    def handler(request):
        seen.append(request.url.path)
        return httpx.Response(200, json=PAYLOAD)

    transcription = asyncio.run(_fetch(handler))
    assert seen == ["/api/projects/proj-1/transcription"]
    assert [s.id for s in transcription.segments] == ["0", "1"]
    assert transcription.segments[0].text == "Hello world."

def test_fetch_unwraps_transcription_key():
    handler = lambda request: httpx.Response(200, json={"transcription": PAYLOAD})
    transcription = asyncio.run(_fetch(handler))
    assert transcription.duration == 4.0

def test_http_error_carries_status():
    handler = lambda request: httpx.Response(404, json={"error": "not found"})
    with pytest.raises(ContentApiError) as exc:
        asyncio.run(_fetch(handler))
    assert exc.value.status_code == 404

def test_transport_error_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ContentApiError) as exc:
        asyncio.run(_fetch(handler))
    assert exc.value.status_code is None

def test_malformed_payload_is_rejected():
    handler = lambda request: httpx.Response(200, json={"segments": [{"id": 0, "text": "no times"}]})
    with pytest.raises(ContentApiError, match="Malformed"):
        asyncio.run(_fetch(handler))

def test_download_passes_project_and_format():
    seen = {}

    def handler(request):
        seen.update(dict(request.url.params))
        return httpx.Response(200, content=b"WEBVTT\n\n")

    async def run():
        async with _client(handler) as client:
            return await client.download_transcript("proj-9", SubtitleFormat.VTT)

    body = asyncio.run(run())
    assert body.startswith(b"WEBVTT")
    assert seen == {"projectId": "proj-9", "format": "vtt"}

# --- REQUEST SCOPE ---

class SlowApi(IContentApi):
    def __init__(self):
        self.started = None
        self.cancelled = False

    async def fetch_transcription(self, project_id):
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise

    async def download_transcript(self, project_id, fmt):
        return b""

def test_closing_scope_cancels_in_flight_fetch():
    api = SlowApi()

    async def run():
        api.started = asyncio.Event()
        scope = RequestScope()
        pending = asyncio.ensure_future(load_transcription("proj-1", scope, api=api))
        await api.started.wait()
        assert scope.pending == 1

        await scope.close()
        with pytest.raises(asyncio.CancelledError):
            await pending
        return scope

    scope = asyncio.run(run())
    assert api.cancelled
    assert scope.closed
    assert scope.pending == 0

def test_load_through_scope_returns_result():
    class FastApi(SlowApi):
        async def fetch_transcription(self, project_id):
            return Transcription.from_payload(PAYLOAD)

    async def run():
        async with RequestScope() as scope:
            return await load_transcription("proj-1", scope, api=FastApi())

    assert asyncio.run(run()).duration == 4.0

def test_closed_scope_refuses_new_work():
    async def run():
        scope = RequestScope()
        await scope.close()
        await scope.close()
        coro = asyncio.sleep(0)
        with pytest.raises(RuntimeError):
            scope.spawn(coro)

    asyncio.run(run())
