"""Handles Speech-to-Text transcription using an Azure OpenAI deployment."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import openai

from .exceptions import TranscriptionError
from .models import AudioAsset

logger = logging.getLogger(__name__)

EMPTY_TRANSCRIPT_PLACEHOLDER = "(no speech recognized)"

class Transcriber(ABC):
    """Abstract base class for transcription services."""

    @abstractmethod
    def transcribe(self, asset: AudioAsset) -> str:
        """
        Transcribes the given audio asset.

        Args:
            asset: The audio to send.

        Returns:
            The transcript text.

        Implementations must report every failure, including unreadable
        files and client or network errors, as TranscriptionError. The
        aggregator only isolates that type; anything else aborts the
        remaining segments.

        Raises:
            TranscriptionError: If transcription fails.
        """
        pass

class AzureOpenAITranscriber(Transcriber):
    """Sends whole files to an Azure OpenAI audio transcription deployment."""

    def __init__(self, client: Any, deployment: str, language: str = "ja"):
        """
        Initializes the AzureOpenAITranscriber.

        Args:
            client: An ``openai.AzureOpenAI`` client (or anything exposing
                    ``audio.transcriptions.create``).
            deployment: Name of the transcription deployment.
            language: ISO-639-1 language hint sent with every request.

        Raises:
            ValueError: If no deployment is given.
        """
        if not deployment:
            raise ValueError("deployment is required")
        self.client = client
        self.deployment = deployment
        self.language = language

    def transcribe(self, asset: AudioAsset) -> str:
        logger.info(f"Sending {asset.name} ({asset.content_type}) for transcription...")
        try:
            with open(asset.path, "rb") as f:
                audio_bytes = f.read()
        except OSError as e:
            raise TranscriptionError(f"Could not read audio file {asset.path}: {e}") from e

        try:
            response = self.client.audio.transcriptions.create(
                model=self.deployment,
                file=(asset.name, audio_bytes, asset.content_type),
                language=self.language,
                response_format="json",
            )
        except openai.APIStatusError as e:
            raise TranscriptionError(
                f"Transcription failed: {e.status_code} - {e.response.text}"
            ) from e
        except openai.OpenAIError as e:
            raise TranscriptionError(f"Transcription request failed: {e}") from e

        text = getattr(response, "text", None)
        if text is None and isinstance(response, dict):
            text = response.get("text")
        if not text:
            logger.warning(f"Transcription of {asset.name} returned no text.")
            return EMPTY_TRANSCRIPT_PLACEHOLDER
        logger.info(f"Transcription of {asset.name} completed ({len(text)} characters).")
        return text
