"""
ContentApiClient: async HTTP client for the dashboard backend.

One AsyncClient per instance; use `async with` or call `aclose()`.
"""
import logging
from typing import Optional

import httpx

from inflio.core.common.enums import SubtitleFormat
from inflio.core.config.settings import settings
from inflio.core.exceptions import ContentApiError
from inflio.features.transcript.domain.models import Transcription
from ..domain.interfaces import IContentApi

logger = logging.getLogger(__name__)


class ContentApiClient(IContentApi):
    def __init__(self,
                 base_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.CONTENT_API_BASE_URL,
            timeout=timeout if timeout is not None else settings.CONTENT_API_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "ContentApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_transcription(self, project_id: str) -> Transcription:
        resp = await self._get(f"/api/projects/{project_id}/transcription")
        data = resp.json()
        # Some endpoints wrap the payload: { "transcription": {...} }
        payload = data.get("transcription", data) if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise ContentApiError(f"Unexpected transcription payload for project {project_id}")
        try:
            return Transcription.from_payload(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise ContentApiError(f"Malformed transcription for project {project_id}: {e}") from e

    async def download_transcript(self, project_id: str, fmt: SubtitleFormat) -> bytes:
        resp = await self._get(
            "/api/process-transcription",
            params={"projectId": project_id, "format": SubtitleFormat(fmt).value},
        )
        return resp.content

    async def _get(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Content API %s failed with HTTP %s", path, status)
            raise ContentApiError(f"GET {path} failed with HTTP {status}", status_code=status) from e
        except httpx.RequestError as e:
            logger.warning("Content API %s unreachable: %s", path, e)
            raise ContentApiError(f"GET {path} failed: {e}") from e
