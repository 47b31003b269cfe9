from .routes import router
from .client import TranscriptExtractor
from .schema import Objection, InterviewData

__all__ = ["InterviewData", "Objection", "TranscriptExtractor", "router"]
