"""Realtime transcription relay and transcript extraction service."""

__all__: list[str] = []
