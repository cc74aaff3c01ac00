"""Settings for the orchestration engine and its model provider."""

import os
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a helpful financial assistant. You can help users with account inquiries, "
    "portfolio performance, and fund transfers. Always be helpful and professional. "
    "When users request transfers, explain that you will prepare the transfer but they "
    "need to confirm the transaction themselves."
)

_ENV_PREFIX = "WEBMCP_"
_TRUE_VALUES = {"1", "true", "yes", "on"}


class AgentSettings(BaseModel):
    """Recognized configuration options.

    Attributes:
        provider: Selects the wire-format adapter used by the model gateway.
        api_key: Bearer token for the provider. Required unless mock mode is enabled.
        base_url: Provider endpoint root.
        model: Model identifier sent with every request.
        max_tokens: Completion token limit per request.
        temperature: Sampling temperature. Low values keep tool selection stable.
        log_requests: Dump outgoing payloads at DEBUG level. Diagnostic only.
        log_responses: Dump incoming payloads at DEBUG level. Diagnostic only.
        development_mock_mode: Short-circuit the provider with canned replies.
        max_tool_rounds: Consecutive tool round-trips allowed per exchange.
        tool_timeout: Seconds an executor may run before it counts as failed.
        system_instruction: Fixed instruction prefixed to every request.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider: str = "openai"
    api_key: Optional[str] = None
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4-turbo-preview"
    max_tokens: int = Field(default=1500, gt=0)
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    log_requests: bool = False
    log_responses: bool = False
    development_mock_mode: bool = False
    max_tool_rounds: int = Field(default=5, ge=1)
    tool_timeout: float = Field(default=30.0, gt=0)
    system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION

    @field_validator("provider")
    @classmethod
    def _normalize_provider(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("api_key")
    @classmethod
    def _blank_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def has_credentials(self) -> bool:
        """Whether requests to a real provider can be authorized."""
        return self.api_key is not None

    @classmethod
    def create(cls, **values: Any) -> "AgentSettings":
        """Build settings, translating pydantic validation failures.

        Raises:
            ConfigurationError: If any value is invalid.
        """
        try:
            return cls(**values)
        except ValidationError as e:
            msg = f"Invalid agent settings: {e}"
            logger.error(msg)
            raise ConfigurationError(msg) from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, load_dotenv_file: bool = True) -> "AgentSettings":
        """Read settings from ``WEBMCP_*`` environment variables.

        ``OPENAI_API_KEY`` and ``OPENAI_BASE_URL`` are honored when the prefixed
        variables are absent.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            load_dotenv_file: Load a ``.env`` file into the process environment first.

        Returns:
            The parsed settings.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        if load_dotenv_file and environ is None:
            load_dotenv()
        env = os.environ if environ is None else environ

        values: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            raw = env.get(f"{_ENV_PREFIX}{field_name.upper()}")
            if raw is not None:
                values[field_name] = raw

        if "api_key" not in values and env.get("OPENAI_API_KEY"):
            values["api_key"] = env["OPENAI_API_KEY"]
        if "base_url" not in values and env.get("OPENAI_BASE_URL"):
            values["base_url"] = env["OPENAI_BASE_URL"]

        for flag in ("log_requests", "log_responses", "development_mock_mode"):
            if flag in values:
                values[flag] = str(values[flag]).strip().lower() in _TRUE_VALUES

        settings = cls.create(**values)
        logger.debug(
            "Loaded settings from environment: provider=%s model=%s mock=%s",
            settings.provider,
            settings.model,
            settings.development_mock_mode,
        )
        return settings
