# chefsense/chefsense/application/voice.py
from __future__ import annotations

from chefsense.application.response_templates import speech_lang_code
from chefsense.domain.markup import to_plain_text

VOICE_ERROR_MESSAGES = {
    "not-allowed": "Microphone access denied. Please allow microphone access.",
    "no-speech": "No speech detected. Please try again.",
    "network": "Network error. Please check your connection.",
    "aborted": "Voice input cancelled.",
    "audio-capture": "No microphone found. Please check your device.",
}
DEFAULT_VOICE_ERROR = "Voice input error. Please try again."


def describe_voice_error(code: str) -> str:
    return VOICE_ERROR_MESSAGES.get((code or "").strip().lower(), DEFAULT_VOICE_ERROR)


def speech_text(reply: str) -> str:
    """Reply text as it should be read aloud: no directives, no markdown marks."""
    text = to_plain_text(reply)
    for mark in ("**", "### ", "## ", "*"):
        text = text.replace(mark, "")
    return "\n".join(line.strip() for line in text.splitlines() if line.strip())


__all__ = ["describe_voice_error", "speech_text", "speech_lang_code"]
