import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# This file: src/ragcore/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Global Application Settings"""

    # Environment
    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Corpus
    DOCUMENTS_DIR: Path = Field(default=SERVER_ROOT / "data" / "documents", description="Directory of source documents")
    KNOWLEDGE_BASE_PATH: Optional[Path] = Field(default=None, description="JSON file overriding the static knowledge base")

    # Index
    INDEX_BACKEND: str = Field(default="chroma", description="Primary index backend: chroma or memory")
    FALLBACK_TO_MEMORY: bool = Field(default=True, description="Use an in-process index when the primary backend is down")
    CHROMA_HOST: str = Field(default="localhost", description="ChromaDB server host")
    CHROMA_PORT: int = Field(default=8000, description="ChromaDB server port")
    CHROMA_COLLECTION: str = Field(default="ragcore_knowledge", description="ChromaDB collection name")

    # Models
    EMBEDDER_TYPE: str = Field(default="openai", description="Embedding provider: openai or hash")
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="OpenAI-compatible API key")
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible API base URL")
    EMBEDDING_MODEL: str = Field(default="text-embedding-ada-002", description="Embedding model name")
    CHAT_MODEL: str = Field(default="gpt-3.5-turbo", description="Chat completion model name")

    # Timeouts and concurrency
    EMBEDDING_TIMEOUT: float = Field(default=30.0, gt=0, description="Per-call embedding timeout (seconds)")
    GENERATION_TIMEOUT: float = Field(default=60.0, gt=0, description="Per-call generation timeout (seconds)")
    INGEST_MAX_CONCURRENCY: int = Field(default=4, ge=1, le=32, description="Concurrent embedding calls during ingestion")

    # Lifecycle
    LAZY_INITIALIZE: bool = Field(default=True, description="Initialize the pipeline on the first query")
    INITIALIZE_ON_STARTUP: bool = Field(default=False, description="Initialize the pipeline when the application starts")

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True
    }


def load_settings() -> Settings:
    """Load settings from environment variables (after reading .env)."""
    if ENV_PATH.exists():
        load_dotenv(ENV_PATH)
    else:
        # Fallback to simple load_dotenv which looks in cwd
        load_dotenv()

    kb_path = os.getenv("KNOWLEDGE_BASE_PATH")
    return Settings(
        ENV=os.getenv("ENV", "development"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        DOCUMENTS_DIR=Path(os.getenv("DOCUMENTS_DIR", str(SERVER_ROOT / "data" / "documents"))),
        KNOWLEDGE_BASE_PATH=Path(kb_path) if kb_path else None,
        INDEX_BACKEND=os.getenv("INDEX_BACKEND", "chroma"),
        FALLBACK_TO_MEMORY=_env_bool("FALLBACK_TO_MEMORY", True),
        CHROMA_HOST=os.getenv("CHROMA_HOST", "localhost"),
        CHROMA_PORT=int(os.getenv("CHROMA_PORT", "8000")),
        CHROMA_COLLECTION=os.getenv("CHROMA_COLLECTION", "ragcore_knowledge"),
        EMBEDDER_TYPE=os.getenv("EMBEDDER_TYPE", "openai"),
        OPENAI_API_KEY=os.getenv("OPENAI_API_KEY"),
        OPENAI_BASE_URL=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        EMBEDDING_MODEL=os.getenv("EMBEDDING_MODEL", "text-embedding-ada-002"),
        CHAT_MODEL=os.getenv("CHAT_MODEL", "gpt-3.5-turbo"),
        EMBEDDING_TIMEOUT=float(os.getenv("EMBEDDING_TIMEOUT", "30")),
        GENERATION_TIMEOUT=float(os.getenv("GENERATION_TIMEOUT", "60")),
        INGEST_MAX_CONCURRENCY=int(os.getenv("INGEST_MAX_CONCURRENCY", "4")),
        LAZY_INITIALIZE=_env_bool("LAZY_INITIALIZE", True),
        INITIALIZE_ON_STARTUP=_env_bool("INITIALIZE_ON_STARTUP", False),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()
