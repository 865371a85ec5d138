from __future__ import annotations

import logging

import httpx

from src.services.errors import AssistBackendError, AssistUnavailableError

logger = logging.getLogger(__name__)


class OllamaClient:
    def __init__(
        self,
        base_url: str,
        model_name: str = "llama3.2",
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.timeout = timeout
        self._transport = transport

    @property
    def generate_url(self) -> str:
        return f"{self.base_url}/api/generate"

    def _build_payload(self, prompt: str) -> dict[str, str | bool]:
        return {
            "model": self.model_name,
            "prompt": prompt,
            "stream": False,
        }

    def generate(self, prompt: str) -> str:
        """Send one non-streaming completion request and return the raw text."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.generate_url, json=self._build_payload(prompt))
                response.raise_for_status()
                data = response.json()
        except (httpx.TimeoutException, httpx.TransportError) as error:
            raise AssistUnavailableError(self.base_url, str(error) or type(error).__name__) from error
        except httpx.HTTPStatusError as error:
            raise AssistBackendError(
                f"HTTP {error.response.status_code} from {self.generate_url}",
                status_code=error.response.status_code,
            ) from error
        except ValueError as error:
            raise AssistBackendError(f"Invalid JSON from {self.generate_url}") from error

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise AssistBackendError("Response payload has no 'response' text")

        logger.debug("Ollama generated %d chars with model=%s", len(text), self.model_name)
        return text
