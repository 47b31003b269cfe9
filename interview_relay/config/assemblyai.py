"""Upstream transcription service (AssemblyAI Universal Streaming) constants."""

from __future__ import annotations

ENV_ASSEMBLYAI_API_KEY = "ASSEMBLYAI_API_KEY"
ENV_ASSEMBLYAI_ENDPOINT = "ASSEMBLYAI_ENDPOINT"
ENV_ASSEMBLYAI_OPEN_TIMEOUT_S = "ASSEMBLYAI_OPEN_TIMEOUT_S"

DEFAULT_ASSEMBLYAI_ENDPOINT = "wss://streaming.assemblyai.com/v3/ws"
DEFAULT_ASSEMBLYAI_OPEN_TIMEOUT_S = 10.0

# Acoustic parameters are fixed per session and sent in the connection URL.
ASR_SAMPLE_RATE_HZ: int = 16000
ASR_FORMAT_TURNS: bool = True
ASR_TURN_SILENCE_THRESHOLD_MS: int = 1500
ASR_TURN_WORD_LIMIT: int = 50

ASSEMBLYAI_URL_PARAMS: dict[str, str] = {
    "sample_rate": str(ASR_SAMPLE_RATE_HZ),
    "format_turns": "true" if ASR_FORMAT_TURNS else "false",
    "turn_detection_silence_threshold_ms": str(ASR_TURN_SILENCE_THRESHOLD_MS),
    "word_limit": str(ASR_TURN_WORD_LIMIT),
}

# Upstream message types
UPSTREAM_TYPE_TURN = "Turn"
UPSTREAM_TYPE_TERMINATION = "Termination"
UPSTREAM_TYPE_TERMINATE = "Terminate"

__all__ = [
    "ASR_FORMAT_TURNS",
    "ASR_SAMPLE_RATE_HZ",
    "ASR_TURN_SILENCE_THRESHOLD_MS",
    "ASR_TURN_WORD_LIMIT",
    "ASSEMBLYAI_URL_PARAMS",
    "DEFAULT_ASSEMBLYAI_ENDPOINT",
    "DEFAULT_ASSEMBLYAI_OPEN_TIMEOUT_S",
    "ENV_ASSEMBLYAI_API_KEY",
    "ENV_ASSEMBLYAI_ENDPOINT",
    "ENV_ASSEMBLYAI_OPEN_TIMEOUT_S",
    "UPSTREAM_TYPE_TERMINATE",
    "UPSTREAM_TYPE_TERMINATION",
    "UPSTREAM_TYPE_TURN",
]
