from .bridge import RelayBridge
from .session import RelaySession
from .link import UpstreamTranscriptionLink
from .normalizer import Ignored, TranscriptEvent, SessionTerminated, normalize

__all__ = [
    "Ignored",
    "RelayBridge",
    "RelaySession",
    "SessionTerminated",
    "TranscriptEvent",
    "UpstreamTranscriptionLink",
    "normalize",
]
