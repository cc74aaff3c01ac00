import pytest
from unittest.mock import patch

from webmcp_agent.llm_core import AgentSettings, DEFAULT_SYSTEM_INSTRUCTION
from webmcp_agent.llm_core.exceptions import ConfigurationError


def test_defaults() -> None:
    settings = AgentSettings()
    assert settings.provider == "openai"
    assert settings.base_url == "https://api.openai.com/v1"
    assert settings.model == "gpt-4-turbo-preview"
    assert settings.max_tokens == 1500
    assert settings.temperature == 0.1
    assert settings.max_tool_rounds == 5
    assert settings.tool_timeout == 30.0
    assert settings.development_mock_mode is False
    assert settings.system_instruction == DEFAULT_SYSTEM_INSTRUCTION
    assert settings.has_credentials is False


def test_blank_api_key_counts_as_missing() -> None:
    assert AgentSettings(api_key="   ").api_key is None
    assert AgentSettings(api_key=" sk-1 ").api_key == "sk-1"


def test_provider_is_normalized() -> None:
    assert AgentSettings(provider=" OpenAI ").provider == "openai"


@pytest.mark.parametrize(
    "values",
    [
        {"max_tokens": 0},
        {"temperature": 3},
        {"max_tool_rounds": 0},
        {"tool_timeout": -1},
        {"unknown_option": True},
    ],
)
def test_invalid_values_raise_configuration_error(values: dict) -> None:
    with pytest.raises(ConfigurationError, match="Invalid agent settings"):
        AgentSettings.create(**values)


def test_settings_are_frozen() -> None:
    settings = AgentSettings()
    with pytest.raises(Exception):
        settings.model = "other"  # type: ignore[misc]


def test_from_env_reads_prefixed_variables() -> None:
    env = {
        "WEBMCP_API_KEY": "sk-env",
        "WEBMCP_MODEL": "gpt-4o-mini",
        "WEBMCP_MAX_TOKENS": "256",
        "WEBMCP_TEMPERATURE": "0.5",
        "WEBMCP_DEVELOPMENT_MOCK_MODE": "true",
        "WEBMCP_LOG_REQUESTS": "no",
        "WEBMCP_MAX_TOOL_ROUNDS": "2",
    }

    settings = AgentSettings.from_env(env)

    assert settings.api_key == "sk-env"
    assert settings.model == "gpt-4o-mini"
    assert settings.max_tokens == 256
    assert settings.temperature == 0.5
    assert settings.development_mock_mode is True
    assert settings.log_requests is False
    assert settings.max_tool_rounds == 2


def test_from_env_openai_fallbacks() -> None:
    settings = AgentSettings.from_env({"OPENAI_API_KEY": "sk-openai", "OPENAI_BASE_URL": "http://localhost:1234/v1"})
    assert settings.api_key == "sk-openai"
    assert settings.base_url == "http://localhost:1234/v1"


def test_prefixed_variables_win_over_fallbacks() -> None:
    settings = AgentSettings.from_env({"OPENAI_API_KEY": "sk-openai", "WEBMCP_API_KEY": "sk-webmcp"})
    assert settings.api_key == "sk-webmcp"


def test_from_env_invalid_value() -> None:
    with pytest.raises(ConfigurationError):
        AgentSettings.from_env({"WEBMCP_MAX_TOKENS": "many"})


def test_from_env_loads_dotenv_only_for_process_environment() -> None:
    with patch("webmcp_agent.llm_core.config.load_dotenv") as load:
        AgentSettings.from_env({"WEBMCP_MODEL": "explicit"})
        load.assert_not_called()

        AgentSettings.from_env(load_dotenv_file=True)
        load.assert_called_once_with()
