"""
Core configuration management for VectorGate.

This module provides centralized configuration management using Pydantic settings
with support for environment variables, type validation, and computed properties.
All application settings are defined here with sensible defaults and validation.

Classes:
    Settings: Main configuration class with all application settings

Environment Variables:
    Application settings can be overridden using environment variables with the
    same names as the class attributes (case-sensitive).

Example:
    >>> from vectorgate.core.config.settings import Settings
    >>> settings = Settings()
    >>> print(settings.QDRANT_URL)
    http://localhost:6333

Configuration Sections:
    - Application: Basic app configuration (name, version, environment)
    - Vector Engine: Backend selection and Qdrant connection settings
    - Collections: Logical collection names and vector dimensionality
    - Query Defaults: Search and scroll defaults, batch limits
    - Embedding: Advertised embedding capability
    - Logging: Application logging configuration
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_BACKENDS = ("qdrant", "memory")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables using the
    same name as the attribute. For example, the QDRANT_URL environment
    variable will override the QDRANT_URL setting.

    Attributes:
        APP_NAME: Service identifier reported by capabilities
        APP_VERSION: Current application version
        ENVIRONMENT: Deployment environment (development/staging/production)
        DEBUG: Enable debug mode with verbose logging

        VECTOR_BACKEND: Engine implementation ("qdrant" or "memory")
        QDRANT_URL: Qdrant endpoint URL
        QDRANT_API_KEY: Optional Qdrant API key
        QDRANT_TIMEOUT: Request timeout in seconds for the Qdrant client
        QDRANT_PREFER_GRPC: Use the gRPC transport when available

        MEMORY_COLLECTION_NAME: Logical collection holding memory records
        DOCUMENT_COLLECTION_NAME: Logical collection holding document chunks
        VECTOR_DIMENSION: Fixed dimensionality of every stored vector

        DEFAULT_SEARCH_LIMIT: Result cap when a search omits ``limit``
        DEFAULT_MIN_SCORE: Similarity floor when a search omits ``min_score``
        DEFAULT_SCROLL_LIMIT: Page size when a scroll omits ``limit``
        MAX_BATCH_SIZE: Largest accepted batch upsert
        STATS_PAGE_SIZE: Page size used while aggregating document statistics
        STATS_REPORT_INTERVAL: Seconds between periodic stats snapshots

        EMBEDDING_BACKEND: Name of the embedding backend ("none" if absent)
        EMBEDDING_MODEL: Embedding model identifier
        EMBEDDING_DEVICE: Device the embedding backend runs on

        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        LOG_FORMAT: Log format (json/text)
        LOG_FILE_PATH: Path for log file output (optional)
    """

    # Application
    APP_NAME: str = "vectorgate"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Vector Engine
    VECTOR_BACKEND: str = "qdrant"
    QDRANT_URL: str = "http://localhost:6333"
    QDRANT_API_KEY: Optional[str] = None
    QDRANT_TIMEOUT: int = 10
    QDRANT_PREFER_GRPC: bool = False

    # Collections
    MEMORY_COLLECTION_NAME: str = "user_memories"
    DOCUMENT_COLLECTION_NAME: str = "user_documents"
    VECTOR_DIMENSION: int = 1024

    # Query Defaults
    DEFAULT_SEARCH_LIMIT: int = 5
    DEFAULT_MIN_SCORE: float = 0.7
    DEFAULT_SCROLL_LIMIT: int = 1000
    MAX_BATCH_SIZE: int = 100
    STATS_PAGE_SIZE: int = 256
    STATS_REPORT_INTERVAL: int = 86400

    # Embedding
    EMBEDDING_BACKEND: str = "none"
    EMBEDDING_MODEL: Optional[str] = None
    EMBEDDING_DEVICE: str = "auto"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE_PATH: Optional[str] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate logging level is a supported value.

        Ensures the log level is one of the standard Python logging
        levels. Converts to uppercase for consistency.

        Raises:
            ValueError: If log level is not supported
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("VECTOR_BACKEND")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate the engine backend name."""
        if v.lower() not in SUPPORTED_BACKENDS:
            raise ValueError(f"VECTOR_BACKEND must be one of: {list(SUPPORTED_BACKENDS)}")
        return v.lower()

    @field_validator(
        "VECTOR_DIMENSION",
        "DEFAULT_SEARCH_LIMIT",
        "DEFAULT_SCROLL_LIMIT",
        "MAX_BATCH_SIZE",
        "STATS_PAGE_SIZE",
        "STATS_REPORT_INTERVAL",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be a positive integer")
        return v

    @field_validator("DEFAULT_MIN_SCORE")
    @classmethod
    def validate_min_score(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("DEFAULT_MIN_SCORE must be between 0.0 and 1.0")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # This will ignore extra fields from environment
    )


settings = Settings()
