"""Gateway to the external generative model."""
from typing import Optional, Protocol

from google import genai

from finscan.config.settings import PLACEHOLDER_API_KEY
from finscan.utils.logger import get_logger
from finscan.utils.exceptions import ModelUnavailable

logger = get_logger()


class ModelGateway(Protocol):
    """Text-in/text-out model call. May be slow, wrong, or unavailable."""

    def generate(self, prompt: str) -> str:
        ...


def is_usable_api_key(api_key: Optional[str]) -> bool:
    """Reject missing, placeholder, and obviously truncated keys."""
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY and len(api_key) > 10


class GeminiGateway:
    """Calls Gemini through the google-genai Client SDK."""

    def __init__(self, api_key: Optional[str], model_name: str = "gemini-2.5-flash-lite"):
        self.model_name = model_name
        self.client = None

        if is_usable_api_key(api_key):
            self.client = genai.Client(api_key=api_key)
            logger.info(f"Gemini gateway initialized with {self.model_name}")
        else:
            logger.warning("Gemini gateway not initialized - invalid or missing API key")

    @property
    def available(self) -> bool:
        return self.client is not None

    def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the raw reply text.

        Raises:
            ModelUnavailable: If the key is not configured, the call fails,
                or the model returns no text
        """
        if self.client is None:
            raise ModelUnavailable("AI service not available. Please configure Gemini API key.")

        logger.debug(f"Sending {len(prompt)} char prompt to {self.model_name}")
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt
            )
        except Exception as e:
            logger.error(f"Gemini call failed: {e}")
            raise ModelUnavailable(f"AI service temporarily unavailable: {e}") from e

        if not response.text:
            raise ModelUnavailable("AI service returned an empty response")

        logger.debug(f"Gemini response (first 500 chars): {response.text[:500]}")
        return response.text
