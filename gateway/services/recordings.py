from typing import Any

from loguru import logger

from gateway.constants import AudioAssetType, SELF_LINK_REL, Stage
from gateway.exceptions import NoAudioAssetsError, NoRecordingAssetError, NoSelfLinkError


def _is_recording(asset: Any) -> bool:
    if not isinstance(asset, dict):
        return False
    return AudioAssetType.RECORDING.value in str(asset.get("type") or "").upper()


def select_recording_url(call_id: str, payload: Any) -> str:
    """
    Pick the download URI of the first RECORDING-like asset in an audio listing.

    Raises NoAudioAssetsError, NoRecordingAssetError or NoSelfLinkError, in that order of checks.
    """
    assets = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(assets, list) or not assets:
        raise NoAudioAssetsError(call_id)

    recording = next((asset for asset in assets if _is_recording(asset)), None)
    if recording is None:
        types = [a.get("type") for a in assets if isinstance(a, dict)]
        logger.warning(f"Call {call_id} has {len(assets)} audio asset(s) but none is a recording: {types}")
        raise NoRecordingAssetError(call_id)

    links = recording.get("links")
    if not isinstance(links, list):
        links = []
    uri = next(
        (link.get("uri") for link in links if isinstance(link, dict) and link.get("rel") == SELF_LINK_REL),
        None,
    )
    if not uri:
        raise NoSelfLinkError(call_id)
    return uri


class RecordingResolver:
    """Locates the recording asset for a call on the telephony platform."""

    def __init__(self, client):
        self.client = client

    async def resolve(self, call_id: str) -> str:
        payload = await self.client.get_json(f"/calls/{call_id}/audio", Stage.RESOLVING)
        uri = select_recording_url(call_id, payload)
        logger.info(f"Recording resolved for call {call_id}")
        return uri
