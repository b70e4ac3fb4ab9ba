import json
from enum import Enum
from typing import Any, Optional, Protocol

import httpx
from fastapi import Depends

from fitness_tracker.core.config import Settings, get_settings


class AIProvider(str, Enum):
    ollama = "ollama"
    huggingface = "huggingface"


class GatewayErrorKind(str, Enum):
    misconfigured_credential = "misconfigured_credential"
    backend_error = "backend_error"
    transport_error = "transport_error"


PROVIDER_LABELS = {
    AIProvider.ollama: "Ollama",
    AIProvider.huggingface: "Hugging Face",
}


class GatewayError(RuntimeError):
    def __init__(
        self,
        provider: AIProvider,
        kind: GatewayErrorKind,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.kind = kind
        self.details = details
        self.status_code = status_code


def resolve_provider(hint: Optional[str], default: Optional[str] = None) -> AIProvider:
    """Pick the backend for one request: explicit hint, then configured default, then Ollama."""
    chosen = (hint or "").strip().lower() or (default or "").strip().lower()
    if chosen == AIProvider.huggingface.value:
        return AIProvider.huggingface
    return AIProvider.ollama


def _post(client: httpx.Client, provider: AIProvider, url: str, **kwargs: Any) -> httpx.Response:
    label = PROVIDER_LABELS[provider]
    try:
        response = client.post(url, **kwargs)
    except httpx.TransportError as exc:
        raise GatewayError(
            provider=provider,
            kind=GatewayErrorKind.transport_error,
            message=f"{label} request failed",
            details=str(exc) or exc.__class__.__name__,
        ) from exc
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise GatewayError(
            provider=provider,
            kind=GatewayErrorKind.backend_error,
            message=f"{label} API error",
            details=exc.response.text,
            status_code=exc.response.status_code,
        ) from exc
    return response


def _ollama_request(client: httpx.Client, base_url: str, model: str, prompt: str) -> Any:
    response = _post(
        client,
        AIProvider.ollama,
        f"{base_url}/api/generate",
        headers={"Content-Type": "application/json"},
        json={"model": model, "prompt": prompt, "stream": False},
    )
    data = response.json()
    if isinstance(data, dict):
        return data.get("response")
    return None


def _huggingface_request(
    client: httpx.Client, base_url: str, model: str, api_key: Optional[str], prompt: str
) -> str:
    if not api_key:
        raise GatewayError(
            provider=AIProvider.huggingface,
            kind=GatewayErrorKind.misconfigured_credential,
            message="Hugging Face API key not set",
            details="HUGGINGFACE_API_KEY is not configured",
        )
    response = _post(
        client,
        AIProvider.huggingface,
        f"{base_url}/{model}",
        headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
        json={"inputs": prompt},
    )
    try:
        data = response.json()
    except ValueError:
        return response.text
    # Expected shape is [{"generated_text": ...}]; anything else is handed back serialized.
    if isinstance(data, list) and data and isinstance(data[0], dict):
        generated = data[0].get("generated_text")
        if isinstance(generated, str) and generated:
            return generated.strip()
    return json.dumps(data)


class LLMClient(Protocol):
    def generate(self, prompt: str, provider: AIProvider) -> str:
        ...

    def generate_local(self, prompt: str, model: Optional[str] = None) -> str:
        ...


class RealLLMClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> None:
        self.settings = settings
        self.transport = transport

    def _client(self) -> httpx.Client:
        # Generation is a single blocking round trip: no timeout, no retry.
        return httpx.Client(transport=self.transport, timeout=None)

    def generate(self, prompt: str, provider: AIProvider) -> str:
        with self._client() as client:
            if provider == AIProvider.huggingface:
                return _huggingface_request(
                    client,
                    self.settings.huggingface_api_url,
                    self.settings.huggingface_model,
                    self.settings.huggingface_api_key,
                    prompt,
                )
            text = _ollama_request(client, self.settings.ollama_url, self.settings.ollama_model, prompt)
            return str(text or "").strip()

    def generate_local(self, prompt: str, model: Optional[str] = None) -> str:
        with self._client() as client:
            text = _ollama_request(
                client, self.settings.ollama_url, model or self.settings.ollama_raw_model, prompt
            )
            return "" if text is None else str(text)


def get_llm_client(settings: Settings = Depends(get_settings)) -> LLMClient:
    return RealLLMClient(settings)
