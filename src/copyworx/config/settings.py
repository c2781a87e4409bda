"""Configuration management for the CopyWorx service.

Settings are read once per process from the environment (and an optional
``.env`` file) and shared through the module-level ``settings`` instance.
"""

from typing import Any, Dict, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


class Settings(BaseSettings):
    """Configuration settings for the CopyWorx API."""

    # LangSmith configuration
    langchain_api_key: Optional[str] = None
    langchain_project: str = "copyworx"
    langchain_endpoint: str = "https://api.smith.langchain.com"
    langchain_tracing_v2: bool = False

    # Model configuration
    model_name: str = "gemini-1.5-pro"
    model_temperature: float = 0.3
    gemini_api_key: Optional[str] = None

    @property
    def google_api_key(self) -> Optional[str]:
        """Return the Gemini API key under the name the Google client expects."""
        return self.gemini_api_key

    # Supabase configuration
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None
    supabase_timeout: int = 10

    # Request limits
    max_text_length: int = 10000
    analysis_truncate_chars: int = 3000
    feedback_max_chars: int = 200

    # Retry configuration
    max_retries: int = 3
    retry_delay: float = 0.1
    retry_backoff: float = 2
    retry_max_delay: float = 60
    analysis_parse_retries: int = 0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    def require_llm_credentials(self) -> str:
        """Return the model API key, or raise if the process was started without one."""
        if not self.google_api_key:
            raise ConfigurationError(
                "API key not configured. Set GEMINI_API_KEY in the environment."
            )
        return self.google_api_key

    def get_langsmith_callbacks(self):
        """Return LangSmith callbacks if tracing is enabled."""
        if self.langchain_tracing_v2:
            from langchain_core.tracers import LangChainTracer
            from langsmith import Client

            client = Client(api_url=self.langchain_endpoint, api_key=self.langchain_api_key)
            return [LangChainTracer(project_name=self.langchain_project, client=client)]
        return None

    def masked_dump(self) -> Dict[str, Any]:
        """Settings as a dict with secrets replaced, for display."""
        data = self.model_dump()
        for key in ("gemini_api_key", "supabase_service_key", "langchain_api_key"):
            if data.get(key):
                data[key] = "****" + data[key][-4:]
        return data

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=("settings_",),
    )


# Global settings instance
settings = Settings()
