"""
Tests for the call recording resolver outcomes.
"""

import pytest

from gateway.constants import Stage
from gateway.exceptions import (
    NoAudioAssetsError,
    NoRecordingAssetError,
    NoSelfLinkError,
    RecordingNotFoundError,
    UpstreamError,
)
from gateway.services.recordings import RecordingResolver, select_recording_url
from conftest import FakeUpstream

VOICEMAIL = {"type": "VOICEMAIL", "links": [{"rel": "self", "uri": "https://x/audio/vm.mp3"}]}
RECORDING = {"type": "RECORDING", "links": [
    {"rel": "call", "uri": "https://x/calls/123"},
    {"rel": "self", "uri": "https://x/audio/123.mp3"},
]}


class TestSelectRecordingUrl:

    @pytest.mark.parametrize("assets", [[VOICEMAIL, RECORDING], [RECORDING, VOICEMAIL]])
    def test_recording_selected_regardless_of_order(self, assets):
        assert select_recording_url("123", {"data": assets}) == "https://x/audio/123.mp3"

    def test_type_match_is_case_insensitive_substring(self):
        asset = {"type": "call_recording", "links": [{"rel": "self", "uri": "https://x/a.mp3"}]}
        assert select_recording_url("1", {"data": [asset]}) == "https://x/a.mp3"

    def test_first_matching_recording_wins(self):
        other = {"type": "RECORDING", "links": [{"rel": "self", "uri": "https://x/second.mp3"}]}
        assert select_recording_url("1", {"data": [RECORDING, other]}) == "https://x/audio/123.mp3"

    @pytest.mark.parametrize("payload", [{"data": []}, {}, {"data": None}, []])
    def test_no_assets(self, payload):
        with pytest.raises(NoAudioAssetsError):
            select_recording_url("1", payload)

    def test_voicemail_only_is_no_recording_not_no_assets(self):
        with pytest.raises(NoRecordingAssetError) as exc_info:
            select_recording_url("1", {"data": [VOICEMAIL]})

        assert not isinstance(exc_info.value, NoAudioAssetsError)
        assert exc_info.value.to_content() == {
            "error": "No recording found for this call",
            "details": "The call may only have voicemail or other audio types",
        }

    @pytest.mark.parametrize("links", [[], None, [{"rel": "call", "uri": "https://x/calls/1"}], [{"rel": "self"}]])
    def test_missing_self_link(self, links):
        with pytest.raises(NoSelfLinkError):
            select_recording_url("1", {"data": [{"type": "RECORDING", "links": links}]})

    def test_outcomes_are_distinct_404s(self):
        errors = [NoAudioAssetsError("1"), NoRecordingAssetError("1"), NoSelfLinkError("1")]

        assert all(isinstance(e, RecordingNotFoundError) for e in errors)
        assert {e.status_code for e in errors} == {404}
        assert len({e.error for e in errors}) == 3


class TestRecordingResolver:

    @pytest.mark.asyncio
    async def test_fetches_call_audio_listing(self):
        client = FakeUpstream({"/calls/123/audio": {"data": [VOICEMAIL, RECORDING]}})

        url = await RecordingResolver(client).resolve("123")

        assert url == "https://x/audio/123.mp3"
        assert client.calls[0]["stage"] is Stage.RESOLVING

    @pytest.mark.asyncio
    async def test_upstream_failure_keeps_upstream_status(self):
        client = FakeUpstream({"/calls/9/audio": UpstreamError(Stage.RESOLVING, 403, "forbidden")})

        with pytest.raises(UpstreamError) as exc_info:
            await RecordingResolver(client).resolve("9")

        assert exc_info.value.status_code == 403
        assert exc_info.value.error == "Failed to get audio list: 403"
