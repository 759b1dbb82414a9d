from enum import Enum


class Stage(str, Enum):
    """Which upstream call produced an outcome."""
    PRESENCE = "presence"
    CALL_LIST = "call_list"
    QUEUE = "queue"
    RESOLVING = "resolving"
    DOWNLOADING = "downloading"
    TRANSCRIBING = "transcribing"
    SUMMARIZING = "summarizing"


class PipelineState(str, Enum):
    RESOLVING = "resolving"
    DOWNLOADING = "downloading"
    TRANSCRIBING = "transcribing"
    SUMMARIZING = "summarizing"
    DONE = "done"


class PresenceStatus(str, Enum):
    LOGGED_OUT = "LOGGED_OUT"
    AVAILABLE = "AVAILABLE"
    BUSY = "BUSY"


class AudioAssetType(str, Enum):
    RECORDING = "RECORDING"
    VOICEMAIL = "VOICEMAIL"


PRESENCE_SCOPE_ALL = "ALL"

SELF_LINK_REL = "self"

QUEUE_NOTE = (
    "X-on /api/v1/groups provides queue size but not individual caller details. "
    "For phone numbers, use console.x-onweb.com live view or contact X-on for additional API endpoints."
)
