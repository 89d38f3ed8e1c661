import asyncio
from types import SimpleNamespace

import pytest

from talent_scout import config, speech
from talent_scout.errors import (
    AudioTooLarge,
    EmptyAudio,
    NoSpeechDetected,
    ServiceNotConfigured,
    SpeechSynthesisError,
)


class FakeSpeechClient:
    def __init__(self, transcripts):
        self.transcripts = transcripts
        self.calls = []

    def recognize(self, config, audio):
        self.calls.append((config, audio))
        return SimpleNamespace(results=[
            SimpleNamespace(alternatives=[SimpleNamespace(transcript=t)]) for t in self.transcripts
        ])


class FakeTTSClient:
    def __init__(self, audio_content=b"ID3fake-mp3"):
        self.audio_content = audio_content
        self.inputs = []

    def synthesize_speech(self, input, voice, audio_config):
        self.inputs.append(input.text)
        return SimpleNamespace(audio_content=self.audio_content)


def test_clean_text_for_tts():
    text = "**Great** answer! See https://example.com\n1. First point\n- bullet → next 😀 #tag <b>bold</b> ━━━"
    assert speech.clean_text_for_tts(text) == "Great answer! See First point bullet next tag bold"


def test_clean_text_unwraps_italics_and_collapses_whitespace():
    assert speech.clean_text_for_tts("  *really*   good\n\n\tjob  ") == "really good job"


def test_transcribe_rejects_empty_audio():
    with pytest.raises(EmptyAudio):
        asyncio.run(speech.transcribe(b""))


def test_transcribe_rejects_oversized_audio():
    with pytest.raises(AudioTooLarge):
        asyncio.run(speech.transcribe(b"x" * (config.MAX_AUDIO_BYTES + 1)))


def test_transcribe_joins_results(monkeypatch):
    client = FakeSpeechClient(["Hello there.", "I have five years in sales. "])
    monkeypatch.setattr(speech, "get_speech_client", lambda: client)

    transcript = asyncio.run(speech.transcribe(b"webm-bytes"))

    assert transcript == "Hello there.\nI have five years in sales."
    recognition_config, audio = client.calls[0]
    assert recognition_config.sample_rate_hertz == 48000
    assert recognition_config.language_code == config.SPEECH_LANGUAGE
    assert audio.content == b"webm-bytes"


def test_transcribe_no_speech(monkeypatch):
    monkeypatch.setattr(speech, "get_speech_client", lambda: FakeSpeechClient([]))
    with pytest.raises(NoSpeechDetected):
        asyncio.run(speech.transcribe(b"silence"))


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr(config, "GOOGLE_CLOUD_CREDENTIALS_BASE64", "")
    monkeypatch.setattr(speech, "_speech_client", None)
    with pytest.raises(ServiceNotConfigured):
        asyncio.run(speech.transcribe(b"audio"))


def test_synthesize_cleans_text(monkeypatch):
    client = FakeTTSClient()
    monkeypatch.setattr(speech, "get_tts_client", lambda: client)

    audio = asyncio.run(speech.synthesize("**Hello** candidate 😀"))

    assert audio == b"ID3fake-mp3"
    assert client.inputs == ["Hello candidate"]


def test_synthesize_validates_text(monkeypatch):
    monkeypatch.setattr(speech, "get_tts_client", lambda: FakeTTSClient())
    with pytest.raises(ValueError):
        asyncio.run(speech.synthesize("### @@ &&"))
    with pytest.raises(ValueError):
        asyncio.run(speech.synthesize("a" * (config.MAX_TTS_CHARS + 1)))


def test_synthesize_without_audio(monkeypatch):
    monkeypatch.setattr(speech, "get_tts_client", lambda: FakeTTSClient(audio_content=b""))
    with pytest.raises(SpeechSynthesisError):
        asyncio.run(speech.synthesize("Hello"))


@pytest.mark.parametrize("credentials", ["%%%", "bm90IGpzb24=", "e30="])
def test_malformed_credentials_are_not_configured(monkeypatch, credentials):
    # undecodable, decodes to "not json", decodes to an empty service account
    monkeypatch.setattr(config, "GOOGLE_CLOUD_CREDENTIALS_BASE64", credentials)
    monkeypatch.setattr(speech, "_tts_client", None)
    with pytest.raises(ServiceNotConfigured, match="invalid"):
        asyncio.run(speech.synthesize("Hello"))
