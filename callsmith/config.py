"""Application configuration via environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings

log = logging.getLogger("callsmith.config")


class Settings(BaseSettings):
    # LLM planner
    llm_provider: str = "claude"  # "claude", "ollama" or "template"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5"
    ollama_model: str = "qwen2.5:7b"
    ollama_url: str = "http://localhost:11434"

    # Twilio
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    # Collaborator wait bounds
    planner_timeout_seconds: float = 45.0
    call_timeout_seconds: float = 20.0

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def twilio_configured(self) -> bool:
        return bool(
            self.twilio_account_sid
            and self.twilio_auth_token
            and self.twilio_phone_number
            and self.twilio_account_sid not in _PLACEHOLDERS
        )

    def validate_startup(self) -> list[str]:
        """Validate configuration at startup. Returns warnings, raises on errors."""
        warnings: list[str] = []

        if self.llm_provider not in ("claude", "ollama", "template"):
            raise ValueError(
                f"LLM_PROVIDER={self.llm_provider!r} is not supported. "
                "Use claude, ollama or template."
            )

        # LLM key, required outside debug
        if self.llm_provider == "claude":
            if not self.anthropic_api_key or self.anthropic_api_key in _PLACEHOLDERS:
                if not self.debug:
                    raise ValueError(
                        "ANTHROPIC_API_KEY is missing or still a placeholder. "
                        "Set it in .env to use Claude."
                    )
                warnings.append(
                    "ANTHROPIC_API_KEY not set. Using the template planner (DEBUG=true)."
                )

        # Twilio: calls are simulated without credentials
        if not self.twilio_configured:
            warnings.append(
                "Twilio credentials not configured; calls will be simulated."
            )

        if self.planner_timeout_seconds <= 0 or self.call_timeout_seconds <= 0:
            raise ValueError("Collaborator timeouts must be positive.")

        return warnings


_PLACEHOLDERS = {"sk-ant-...", "AC..."}

settings = Settings()
