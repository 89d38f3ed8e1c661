"""Exceptions raised by the service layer; routes map them to HTTP status codes."""
from typing import Optional


class ServiceNotConfigured(RuntimeError):
    """A hosted service is missing its credentials"""


class LLMError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TranscriptionError(RuntimeError):
    pass


class EmptyAudio(TranscriptionError):
    pass


class AudioTooLarge(TranscriptionError):
    pass


class NoSpeechDetected(TranscriptionError):
    pass


class TranscriptionTimeout(TranscriptionError):
    pass


class SpeechSynthesisError(RuntimeError):
    pass


class InvalidCVFile(ValueError):
    pass


class ExamScoringError(ValueError):
    """The model's feedback did not contain all four exam scores"""
