"""
Lightweight client for the speech recognition gateway REST API.

Wraps the five gateway endpoints (base64 audio, file upload, large file
upload, result tracking and remote links) behind SpeechClient methods,
each available in blocking and async form.
"""
from .client import (
    ApiResponse,
    ClientError,
    ResponseMeta,
    SpeechClient,
    UploadEndpoint,
)
from .config import ClientConfig

__all__ = [
    "ApiResponse",
    "ClientConfig",
    "ClientError",
    "ResponseMeta",
    "SpeechClient",
    "UploadEndpoint",
]
