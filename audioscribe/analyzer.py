"""Handles transcript analysis using an Azure OpenAI chat deployment."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import openai

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_PREFIX = "AI analysis error"
EMPTY_ANALYSIS_PLACEHOLDER = "(no analysis returned)"

class Analyzer(ABC):
    """Abstract base class for transcript analysis services."""

    @abstractmethod
    def analyze(self, transcript: str) -> str:
        """
        Produces analysis text for a transcript.

        Implementations report failures inside the returned text instead of
        raising, so a finished transcript is never lost to an analysis error.
        """
        pass

class AzureOpenAIAnalyzer(Analyzer):
    """Asks a chat deployment to analyze a transcript."""

    def __init__(
        self,
        client: Any,
        deployment: str,
        system_prompt: str,
        user_prompt_template: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ):
        """
        Initializes the AzureOpenAIAnalyzer.

        Args:
            client: An ``openai.AzureOpenAI`` client (or anything exposing
                    ``chat.completions.create``).
            deployment: Name of the chat deployment.
            system_prompt: System message sent with every request.
            user_prompt_template: User message; ``{0}`` or ``{transcript}``
                                  is replaced by the transcript.
            max_tokens: Completion token limit.
            temperature: Sampling temperature.
        """
        if not deployment:
            raise ValueError("deployment is required")
        self.client = client
        self.deployment = deployment
        self.system_prompt = system_prompt
        self.user_prompt_template = user_prompt_template
        self.max_tokens = max_tokens
        self.temperature = temperature

    def build_messages(self, transcript: str) -> list:
        user_prompt = self.user_prompt_template.format(transcript, transcript=transcript)
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": user_prompt},
        ]

    def analyze(self, transcript: str) -> str:
        try:
            messages = self.build_messages(transcript)
        except (IndexError, KeyError, ValueError) as e:
            logger.error(f"User prompt template could not be formatted: {e}")
            return f"{ANALYSIS_ERROR_PREFIX}: invalid user prompt template ({e})"

        logger.info(f"Requesting analysis from deployment '{self.deployment}'...")
        try:
            response = self.client.chat.completions.create(
                model=self.deployment,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.APIStatusError as e:
            logger.error(f"Analysis request rejected: {e.status_code}")
            return f"{ANALYSIS_ERROR_PREFIX}: {e.status_code} - {e.response.text}"
        except openai.OpenAIError as e:
            logger.error(f"Analysis request failed: {e}", exc_info=True)
            return f"{ANALYSIS_ERROR_PREFIX}: {e}"

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Unexpected analysis response shape: {e}")
            return f"{ANALYSIS_ERROR_PREFIX}: unexpected response ({e})"

        if not content:
            logger.warning("Analysis response contained no text.")
            return EMPTY_ANALYSIS_PLACEHOLDER
        logger.info("Analysis completed.")
        return content
