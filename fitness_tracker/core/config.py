import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from fastapi import Request

DEFAULT_HUGGINGFACE_MODEL = "meta-llama/Llama-2-7b-chat-hf"
DEFAULT_HUGGINGFACE_API_URL = "https://api-inference.huggingface.co/models"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama2"
DEFAULT_OLLAMA_RAW_MODEL = "llama3"
DEFAULT_WORKOUTS_FILE = "workouts.json"


@dataclass(frozen=True)
class Settings:
    ai_provider: str = "ollama"
    huggingface_api_key: Optional[str] = None
    huggingface_model: str = DEFAULT_HUGGINGFACE_MODEL
    huggingface_api_url: str = DEFAULT_HUGGINGFACE_API_URL
    ollama_url: str = DEFAULT_OLLAMA_URL
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    ollama_raw_model: str = DEFAULT_OLLAMA_RAW_MODEL
    workouts_file: Path = Path(DEFAULT_WORKOUTS_FILE)


def _env(environ: Mapping[str, str], name: str, default: str) -> str:
    return (environ.get(name) or "").strip() or default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from the process environment (or an explicit mapping)."""
    env = os.environ if environ is None else environ
    workouts_file = Path(_env(env, "WORKOUTS_FILE", DEFAULT_WORKOUTS_FILE)).expanduser()
    if not workouts_file.is_absolute():
        workouts_file = Path.cwd() / workouts_file
    return Settings(
        ai_provider=_env(env, "AI_PROVIDER", "ollama").lower(),
        huggingface_api_key=(env.get("HUGGINGFACE_API_KEY") or "").strip() or None,
        huggingface_model=_env(env, "HUGGINGFACE_MODEL", DEFAULT_HUGGINGFACE_MODEL),
        huggingface_api_url=_env(env, "HUGGINGFACE_API_URL", DEFAULT_HUGGINGFACE_API_URL).rstrip("/"),
        ollama_url=_env(env, "OLLAMA_URL", DEFAULT_OLLAMA_URL).rstrip("/"),
        ollama_model=_env(env, "OLLAMA_MODEL", DEFAULT_OLLAMA_MODEL),
        ollama_raw_model=_env(env, "OLLAMA_RAW_MODEL", DEFAULT_OLLAMA_RAW_MODEL),
        workouts_file=workouts_file,
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
