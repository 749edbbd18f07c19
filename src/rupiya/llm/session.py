"""Model session abstraction and the Gemini backend (google-genai)."""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from google import genai
from google.genai import types, errors

from rupiya.utils.logger import get_logger
from rupiya.utils.retry import retry_with_backoff, RETRYABLE_ERRORS
from rupiya.utils.exceptions import LLMError, ModelUnavailableError

logger = get_logger()


class ModelAvailability(str, Enum):
    READY = "ready"
    NOT_READY = "not_ready"
    UNKNOWN = "unknown"


class ModelSession(ABC):
    """One stateful model conversation, reused across the lines of a run."""

    @abstractmethod
    def prompt(self, text: str) -> str:
        """Send one prompt and return the raw text response."""

    @abstractmethod
    def close(self) -> None:
        """Release the session. Safe to call more than once."""


class ModelSessionFactory(ABC):
    """Capability-gated source of model sessions."""

    @abstractmethod
    def availability(self) -> ModelAvailability:
        """Report whether sessions can be created."""

    @abstractmethod
    def create_session(self, system_prompt: str) -> ModelSession:
        """Create a session; raises ModelUnavailableError on failure."""


class GeminiSession(ModelSession):
    """Chat session on the Gemini API."""

    def __init__(self, client: genai.Client, chat):
        self._client = client
        self._chat = chat
        self._closed = False

    def prompt(self, text: str) -> str:
        if self._closed:
            raise LLMError("Session already closed")

        response = self._chat.send_message(text)
        if not response.text:
            raise LLMError("Model returned empty response")
        return response.text

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.close()
        logger.debug("Gemini session closed")


class GeminiSessionFactory(ModelSessionFactory):
    """Creates Gemini chat sessions with native Google AI SDK."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash-lite",
        temperature: float = 0.1,
        probe_max_retries: int = 2,
        probe_initial_delay: float = 1.0,
        probe_backoff_factor: float = 2.0
    ):
        """
        Initialize the factory.

        Args:
            api_key: Google AI API key
            model_name: Gemini model used for every session
            temperature: Sampling temperature
            probe_max_retries: Retries for the availability probe
            probe_initial_delay: First retry delay in seconds
            probe_backoff_factor: Delay multiplier between retries
        """
        self.api_key = api_key
        self.model_name = model_name
        self.temperature = temperature
        self.probe_max_retries = probe_max_retries
        self.probe_initial_delay = probe_initial_delay
        self.probe_backoff_factor = probe_backoff_factor
        self._availability = ModelAvailability.UNKNOWN

    @classmethod
    def from_settings(cls, settings, api_key: str, model_name: Optional[str] = None) -> "GeminiSessionFactory":
        return cls(
            api_key=api_key,
            model_name=model_name or settings.llm_model_name,
            temperature=settings.llm_temperature,
            probe_max_retries=settings.llm_probe_max_retries,
            probe_initial_delay=settings.llm_probe_initial_delay_seconds,
            probe_backoff_factor=settings.llm_probe_backoff_factor
        )

    def availability(self) -> ModelAvailability:
        """Probe once and cache the result."""
        if self._availability == ModelAvailability.UNKNOWN:
            self._availability = self.probe()
        return self._availability

    def probe(self) -> ModelAvailability:
        """Check that the API key works and the model exists."""
        if not self.api_key:
            logger.info("No Gemini API key configured; model unavailable")
            return ModelAvailability.NOT_READY

        fetch = retry_with_backoff(
            max_retries=self.probe_max_retries,
            initial_delay=self.probe_initial_delay,
            backoff_factor=self.probe_backoff_factor,
            retryable_exceptions=RETRYABLE_ERRORS + (errors.ServerError,)
        )(self._fetch_model)

        client = genai.Client(api_key=self.api_key)
        try:
            fetch(client)
        except errors.APIError as e:
            logger.warning(f"Gemini model {self.model_name} unavailable: {e}")
            return ModelAvailability.NOT_READY
        except Exception as e:
            logger.warning(f"Gemini availability check failed: {e}")
            return ModelAvailability.NOT_READY
        finally:
            client.close()

        logger.info(f"Gemini model {self.model_name} is ready")
        return ModelAvailability.READY

    def create_session(self, system_prompt: str) -> ModelSession:
        client = genai.Client(api_key=self.api_key)
        try:
            chat = client.chats.create(
                model=self.model_name,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=self.temperature
                )
            )
        except Exception as e:
            client.close()
            raise ModelUnavailableError(f"Failed to create Gemini session: {e}")

        logger.info(f"Gemini session created with {self.model_name}")
        return GeminiSession(client, chat)

    def _fetch_model(self, client: genai.Client):
        return client.models.get(model=self.model_name)
