import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header

from fitness_tracker.core.config import Settings, get_settings
from fitness_tracker.core.errors import APIError
from fitness_tracker.core.schemas import GeneratedTextResponse, PromptRequest, RawGenerateRequest
from fitness_tracker.services.llm import (
    GatewayError,
    GatewayErrorKind,
    LLMClient,
    get_llm_client,
    resolve_provider,
)

router = APIRouter(prefix="/api", tags=["ai"])
logger = logging.getLogger("uvicorn.error")


def gateway_failure(exc: GatewayError, fallback: str) -> APIError:
    if exc.kind == GatewayErrorKind.transport_error:
        return APIError(500, fallback, details=exc.details)
    return APIError(500, str(exc), details=exc.details)


@router.post("/ask-ai", response_model=GeneratedTextResponse)
def ask_ai(
    payload: PromptRequest,
    x_ai_provider: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    llm_client: LLMClient = Depends(get_llm_client),
) -> GeneratedTextResponse:
    provider = resolve_provider(x_ai_provider, settings.ai_provider)
    try:
        text = llm_client.generate(payload.prompt, provider)
    except GatewayError as exc:
        logger.warning(
            "ask_ai_gateway_error provider=%s kind=%s detail=%s",
            exc.provider.value,
            exc.kind.value,
            exc.details,
        )
        raise gateway_failure(exc, "Failed to get AI response") from exc
    except Exception as exc:
        logger.exception("ask_ai_unhandled_error provider=%s detail=%s", provider.value, str(exc))
        raise APIError(500, "Failed to get AI response", details=str(exc)) from exc
    return GeneratedTextResponse(response=text)


@router.post("/ollama", response_model=GeneratedTextResponse)
def raw_generate(
    payload: RawGenerateRequest,
    llm_client: LLMClient = Depends(get_llm_client),
) -> GeneratedTextResponse:
    try:
        text = llm_client.generate_local(payload.prompt, model=payload.model)
    except GatewayError as exc:
        logger.warning("raw_generate_gateway_error kind=%s detail=%s", exc.kind.value, exc.details)
        raise APIError(500, "Ollama error", details=exc.details) from exc
    except Exception as exc:
        logger.exception("raw_generate_unhandled_error detail=%s", str(exc))
        raise APIError(500, "Ollama error", details=str(exc)) from exc
    return GeneratedTextResponse(response=text)
