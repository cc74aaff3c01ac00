import os
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import find_dotenv, load_dotenv
from openai import AsyncOpenAI

from helpers import RecordingSurface
from webmcp_agent.fidelity import AccountBook, TransferDesk, build_fidelity_tools
from webmcp_agent.llm_core import ToolRegistry

# Only the recording test needs real credentials; everything else runs offline.
env_file = find_dotenv()
if env_file:
    load_dotenv(env_file)


@pytest.fixture
def book() -> AccountBook:
    return AccountBook()


@pytest.fixture
def desk(book: AccountBook) -> TransferDesk:
    return TransferDesk(book)


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def fidelity_registry(book: AccountBook, desk: TransferDesk, surface: RecordingSurface) -> ToolRegistry:
    return ToolRegistry(build_fidelity_tools(book, desk, surface))


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture(scope="session")
def vcr_config() -> Dict[str, Any]:
    return {
        "cassette_library_dir": "tests/cassettes",
        "record_mode": os.getenv("VCR_RECORD_MODE", "once"),
        "match_on": ["method", "path", "query"],
        "filter_headers": ["authorization", "openai-organization", "api-key"],
        "decode_compressed_response": True,
    }
