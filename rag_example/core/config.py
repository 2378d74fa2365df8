"""Configuration module for the RAG example.

This module handles all application configuration using pydantic-settings.
Values come from environment variables or a local ``.env`` file.
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Explicitly load .env file BEFORE BaseSettings reads environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_STREAM_PROMPT = "Tell me about developer jokes"
DEFAULT_QUESTION = "What do the stored documents say?"


class Settings(BaseSettings):
    """Application settings class.

    This class defines all configuration settings for the application.
    Settings are loaded from environment variables with appropriate defaults.
    """

    # Application settings
    environment: str = "development"
    debug: bool = False
    log_level: str = Field(default="INFO", description="Root log level for the application loggers.")

    # LLM settings
    ollama_base_url: str = Field(default="http://localhost:11434", description="Base URL for the Ollama API server.")
    default_model: str = Field(default="llama3.1:latest", description="Default Ollama chat model to use.")

    # Embedding settings
    embedding_provider: str = Field(default="bge_local", description="Embedding provider ('bge_local' or 'ollama').")
    embedding_model: str = Field(default="BAAI/bge-small-en-v1.5", description="Sentence Transformer model for local embeddings.")
    ollama_embedding_model: str = Field(default="nomic-embed-text", description="Ollama model used when embedding_provider is 'ollama'.")

    # Vector store settings
    vector_store_path: str = Field(default="./data/chroma_db", description="Path to the ChromaDB persistence directory.")
    vector_collection_name: str = Field(default="documents", description="Name of the ChromaDB collection.")

    # Retrieval / prompt settings
    retrieval_top_k: int = Field(default=3, gt=0, description="Number of similar documents injected into the prompt.")
    prompt_template_path: Optional[str] = Field(
        default=None,
        description="Optional path to a prompt template file. Defaults to the packaged prompts/prompt.st.",
    )
    stream_prompt: str = Field(default=DEFAULT_STREAM_PROMPT, description="Fixed prompt streamed by GET /ollama.")
    default_question: str = Field(default=DEFAULT_QUESTION, description="Message used by the 'q' command when none is given.")

    # API Server Configuration (for uvicorn)
    api_host: str = Field(default="0.0.0.0", description="Host for the FastAPI server.")
    api_port: int = Field(default=8000, description="Port for the FastAPI server.")
    api_reload: bool = Field(default=False, description="Enable auto-reload for the FastAPI server (development).")
    api_log_level: str = Field(default="info", description="Log level for the FastAPI server.")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings: A settings instance loaded from .env/env vars.
    """
    settings = Settings()
    logger.debug(f"Settings loaded for environment '{settings.environment}' (model: {settings.default_model})")
    return settings
