"""
Talent Scout - speech services
Google Cloud Speech-to-Text for candidate audio and Text-to-Speech for the
interviewer's replies.
"""
import asyncio
import base64
import json
import logging
import re
from typing import Optional

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import speech
from google.cloud import texttospeech
from google.oauth2 import service_account

from talent_scout import config
from talent_scout.errors import (
    AudioTooLarge,
    EmptyAudio,
    NoSpeechDetected,
    ServiceNotConfigured,
    SpeechSynthesisError,
    TranscriptionError,
    TranscriptionTimeout,
)

logger = logging.getLogger(__name__)

_speech_client: Optional[speech.SpeechClient] = None
_tts_client: Optional[texttospeech.TextToSpeechClient] = None


def _load_credentials():
    """Service-account credentials shipped base64-encoded in the environment"""
    if not config.GOOGLE_CLOUD_CREDENTIALS_BASE64:
        raise ServiceNotConfigured("Google Cloud credentials not configured")
    try:
        info = json.loads(base64.b64decode(config.GOOGLE_CLOUD_CREDENTIALS_BASE64).decode("utf-8"))
        return service_account.Credentials.from_service_account_info(info)
    except ValueError as e:
        # binascii.Error, UnicodeDecodeError and JSONDecodeError are all ValueErrors
        logger.error("[GOOGLE] ❌ Invalid service account credentials: %s", e)
        raise ServiceNotConfigured("Google Cloud credentials are invalid") from e


def get_speech_client() -> speech.SpeechClient:
    global _speech_client
    if _speech_client is None:
        _speech_client = speech.SpeechClient(credentials=_load_credentials())
    return _speech_client


def get_tts_client() -> texttospeech.TextToSpeechClient:
    global _tts_client
    if _tts_client is None:
        _tts_client = texttospeech.TextToSpeechClient(credentials=_load_credentials())
    return _tts_client


# ============================================================================
# SPEECH-TO-TEXT
# ============================================================================

async def transcribe(audio: bytes) -> str:
    """Transcribe one recorded answer (browser WebM/Opus, 48 kHz)."""
    if not audio:
        raise EmptyAudio("No audio provided")
    if len(audio) > config.MAX_AUDIO_BYTES:
        logger.warning("[TRANSCRIBE] ⚠️ Audio too long: %d bytes", len(audio))
        raise AudioTooLarge("Audio too long. Please keep your response under 1 minute.")

    client = get_speech_client()
    recognition_config = speech.RecognitionConfig(
        encoding=speech.RecognitionConfig.AudioEncoding.WEBM_OPUS,
        sample_rate_hertz=48000,
        language_code=config.SPEECH_LANGUAGE,
        enable_automatic_punctuation=True,
        model="default",
        use_enhanced=True,
    )
    recognition_audio = speech.RecognitionAudio(content=audio)

    logger.info("[TRANSCRIBE] Sending %d bytes (%s)", len(audio), config.SPEECH_LANGUAGE)
    try:
        response = await asyncio.wait_for(
            asyncio.to_thread(client.recognize, config=recognition_config, audio=recognition_audio),
            timeout=config.TRANSCRIBE_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as e:
        raise TranscriptionTimeout(
            f"Transcription timeout after {config.TRANSCRIBE_TIMEOUT_SECONDS}s"
        ) from e
    except GoogleAPICallError as e:
        logger.error("[TRANSCRIBE] ❌ Speech API error: %s", e)
        raise TranscriptionError(f"Transcription failed: {e.message}") from e

    transcript = "\n".join(
        result.alternatives[0].transcript if result.alternatives else ""
        for result in response.results
    ).strip()

    if not transcript:
        logger.info("[TRANSCRIBE] No transcription detected")
        raise NoSpeechDetected("Could not understand audio. Please speak clearly and try again.")

    logger.info("[TRANSCRIBE] ✅ Transcript length: %d", len(transcript))
    return transcript


# ============================================================================
# TEXT-TO-SPEECH
# ============================================================================

def clean_text_for_tts(text: str) -> str:
    """Strip markup and symbols the synthesizer would read aloud or reject"""
    cleaned = re.sub(r'https?://\S+', '', text)
    cleaned = re.sub(r'<[^>]*>', ' ', cleaned)
    cleaned = re.sub(r'\*\*([^*]+)\*\*', r'\1', cleaned)
    cleaned = re.sub(r'\*([^*]+)\*', r'\1', cleaned)
    cleaned = re.sub(r'[-_•→←↑↓]', ' ', cleaned)
    cleaned = re.sub(r'[#@$%^&]', '', cleaned)
    cleaned = re.sub(r'^\d+\.\s+', '', cleaned, flags=re.MULTILINE)
    cleaned = re.sub('[\U0001F300-\U0001F9FF]', '', cleaned)
    cleaned = re.sub(r'[━═─┌┐└┘├┤│]', ' ', cleaned)
    cleaned = re.sub(r'\s+', ' ', cleaned)
    return cleaned.strip()


async def synthesize(text: str) -> bytes:
    """Render the interviewer's reply as MP3 audio"""
    cleaned = clean_text_for_tts(text)
    if not cleaned:
        raise ValueError("Text is empty after cleaning")
    if len(cleaned) > config.MAX_TTS_CHARS:
        raise ValueError(f"Text too long. Max {config.MAX_TTS_CHARS} characters.")

    client = get_tts_client()
    logger.info("[TTS] Synthesizing %d chars with voice %s", len(cleaned), config.TTS_VOICE)

    try:
        response = await asyncio.to_thread(
            client.synthesize_speech,
            input=texttospeech.SynthesisInput(text=cleaned),
            voice=texttospeech.VoiceSelectionParams(
                language_code=config.SPEECH_LANGUAGE,
                name=config.TTS_VOICE,
                ssml_gender=texttospeech.SsmlVoiceGender.FEMALE,
            ),
            audio_config=texttospeech.AudioConfig(
                audio_encoding=texttospeech.AudioEncoding.MP3,
                speaking_rate=1.0,
                pitch=0.0,
                volume_gain_db=0.0,
            ),
        )
    except GoogleAPICallError as e:
        logger.error("[TTS] ❌ Text-to-Speech API error: %s", e)
        raise SpeechSynthesisError(f"Failed to generate speech: {e.message}") from e

    if not response.audio_content:
        logger.error("[TTS] ❌ No audio content in response")
        raise SpeechSynthesisError("No audio content received from TTS service")

    logger.info("[TTS] ✅ Audio generated: %d bytes", len(response.audio_content))
    return response.audio_content
