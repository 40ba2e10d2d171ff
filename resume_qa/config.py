# resume_qa/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from resume_qa.errors import ConfigurationError

# -----------------------------
# Defaults
# -----------------------------
EMBED_MODEL = "text-embedding-3-small"
CHAT_MODEL = "gpt-4o-mini"
CHUNK_SIZE_CHARS = 1000
CHUNK_OVERLAP_CHARS = 120
TOP_K = 5
PORT = 3000

DATA_DIR = Path("data")
INDEX_DIR = Path("index")
INDEX_FILE_NAME = "knowledge.index.json"
LEGACY_INDEX_FILE_NAME = "resume.index.json"  # written by older builds (resume only)
LOGS_DIR = Path("logs")


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None
    embed_model: str = EMBED_MODEL
    chat_model: str = CHAT_MODEL
    chunk_size_chars: int = CHUNK_SIZE_CHARS
    chunk_overlap_chars: int = CHUNK_OVERLAP_CHARS
    top_k: int = TOP_K
    port: int = PORT
    data_dir: Path = DATA_DIR
    index_dir: Path = INDEX_DIR
    logs_dir: Path = LOGS_DIR
    build_index_on_startup: bool = True

    @property
    def index_path(self) -> Path:
        return self.index_dir / INDEX_FILE_NAME

    @property
    def legacy_index_path(self) -> Path:
        return self.index_dir / LEGACY_INDEX_FILE_NAME

    def require_api_key(self) -> str:
        if not self.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY not set. Create .env from .env.example")
        return self.openai_api_key


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """
    Reads .env (if present) and then the process environment.
    Nothing is validated here except number parsing; callers that talk to
    OpenAI call settings.require_api_key().
    """
    load_dotenv()

    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        embed_model=os.getenv("EMBED_MODEL") or EMBED_MODEL,
        chat_model=os.getenv("CHAT_MODEL") or CHAT_MODEL,
        chunk_size_chars=_int_env("CHUNK_SIZE_CHARS", CHUNK_SIZE_CHARS),
        chunk_overlap_chars=_int_env("CHUNK_OVERLAP_CHARS", CHUNK_OVERLAP_CHARS),
        top_k=_int_env("TOP_K", TOP_K),
        port=_int_env("PORT", PORT),
        data_dir=Path(os.getenv("DATA_DIR") or DATA_DIR),
        index_dir=Path(os.getenv("INDEX_DIR") or INDEX_DIR),
        logs_dir=Path(os.getenv("LOGS_DIR") or LOGS_DIR),
        build_index_on_startup=_bool_env("BUILD_INDEX_ON_STARTUP", True),
    )
