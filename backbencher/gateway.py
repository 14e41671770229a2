import logging
import os
from typing import Optional

from openai import OpenAI, APIError, APIStatusError

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_MODEL = "llama3-70b-8192"
MAX_TOKENS = 500
TEMPERATURE = 0.7


class GatewayError(Exception):
    """Base class for failures talking to the chat-completion service."""


class ExternalServiceError(GatewayError):
    """Upstream answered with a non-success status, or could not be reached."""


class EmptyResponseError(GatewayError):
    """Upstream answered successfully but with no completions."""


class ModelGateway:
    """One blocking chat-completion round trip per call, no retries."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_name: Optional[str] = None,
    ):
        self.api_key = api_key or os.getenv("GROQ_API_KEY")
        self.base_url = base_url or os.getenv("GROQ_BASE_URL", GROQ_BASE_URL)
        self.model_name = model_name or os.getenv("GROQ_MODEL", GROQ_MODEL)
        self._client = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ExternalServiceError(
                    "Groq API key not found. Please set GROQ_API_KEY environment variable."
                )
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
            )
        return self._client

    def complete(self, prompt: str) -> str:
        logger.info("Issuing completion request to model %s", self.model_name)
        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except APIStatusError as e:
            logger.error("Groq API returned %s for model %s", e.status_code, self.model_name)
            raise ExternalServiceError(
                f"Groq API error: {e.status_code} - {e.response.text}"
            ) from e
        except APIError as e:
            logger.error("Groq API request failed: %s", e)
            raise ExternalServiceError(f"Groq API error: {e}") from e

        if not getattr(response, "choices", None):
            logger.error("Received 0 choices from %s", self.model_name)
            raise EmptyResponseError("No response generated from Groq API")

        return (response.choices[0].message.content or "").strip()


_gateway: Optional[ModelGateway] = None


# Dependency for FastAPI routes; tests override it with a fake
def get_gateway() -> ModelGateway:
    global _gateway
    if _gateway is None:
        _gateway = ModelGateway()
    return _gateway
