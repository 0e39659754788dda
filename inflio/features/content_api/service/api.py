from typing import Optional
from inflio.features.transcript.domain.models import Transcription
from ..data.http_client import ContentApiClient
from ..domain.interfaces import IContentApi
from .scope import RequestScope

async def load_transcription(project_id: str,
                             scope: RequestScope,
                             api: Optional[IContentApi] = None) -> Transcription:
    """
    Public Service API: fetch a project's transcript within a view's scope.
    If the scope closes first, this raises asyncio.CancelledError.
    """
    if api is not None:
        return await scope.spawn(api.fetch_transcription(project_id))

    async with ContentApiClient() as client:
        return await scope.spawn(client.fetch_transcription(project_id))
