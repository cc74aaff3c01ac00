import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, cast

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from webmcp_agent.llm_core.config import AgentSettings, DEFAULT_SYSTEM_INSTRUCTION
from webmcp_agent.llm_core.exceptions import AuthError, MalformedReplyError, TransportError
from webmcp_agent.llm_core.gateway import Decision, ModelGateway, TextDecision, ToolCallDecision
from webmcp_agent.llm_core.logger import get_logger
from webmcp_agent.llm_core.messages import AssistantTurn, ToolResultTurn, Turn, UserTurn
from webmcp_agent.llm_core.tools import Tool

logger = get_logger(__name__)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-finite number {token} is not valid JSON")


_EMPTY_PARAMETERS: Dict[str, Any] = {"type": "object", "properties": {}}


class OpenAIGateway(ModelGateway):
    """
    Model gateway for OpenAI-compatible chat completion endpoints.

    Each ``decide`` performs exactly one ``chat.completions.create`` call with the
    full history and the tool declarations. Client-side retries are disabled:
    a failed request surfaces as an error decision and the user decides whether
    to try again.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        *,
        model_name: str = "gpt-4-turbo-preview",
        sys_instruction: str = DEFAULT_SYSTEM_INSTRUCTION,
        temp: float = 0.1,
        max_tokens: int = 1500,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        log_requests: bool = False,
        log_responses: bool = False,
    ):
        """
        Initializes the OpenAI gateway.

        Args:
            client: An initialized AsyncOpenAI client. Built from ``api_key`` and
                ``base_url`` on first use when omitted.
            model_name: The identifier of the model to use.
            sys_instruction: Fixed system instruction prefixed to every request.
            temp: The sampling temperature.
            max_tokens: The maximum number of tokens to generate in a reply.
            api_key: Bearer token used when no client is given.
            base_url: Endpoint root used when no client is given.
            log_requests: Log outgoing payloads at DEBUG level.
            log_responses: Log incoming payloads at DEBUG level.
        """
        self.client: Optional[AsyncOpenAI] = client
        self.model = model_name
        self.sys_instruction = sys_instruction
        self.temperature = temp
        self.max_tokens = max_tokens
        self.log_requests = log_requests
        self.log_responses = log_responses
        self._api_key = api_key
        self._base_url = base_url

    @classmethod
    def from_settings(cls, settings: AgentSettings, client: Optional[AsyncOpenAI] = None) -> "OpenAIGateway":
        """Build a gateway from agent settings."""
        return cls(
            client,
            model_name=settings.model,
            sys_instruction=settings.system_instruction,
            temp=settings.temperature,
            max_tokens=settings.max_tokens,
            api_key=settings.api_key,
            base_url=settings.base_url,
            log_requests=settings.log_requests,
            log_responses=settings.log_responses,
        )

    def _get_client(self) -> AsyncOpenAI:
        """Return the client, creating it on first use.

        Raises:
            AuthError: If no client was given and no API key is configured.
        """
        if self.client is None:
            if not self._api_key:
                raise AuthError("No API key configured for the OpenAI provider.")
            self.client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url, max_retries=0)
        return self.client

    async def _decide_impl(self, history: Sequence[Turn], tools: Sequence[Tool]) -> Decision:
        client = self._get_client()
        request = self._build_request(history, tools)

        logger.debug(
            f"Sending request to model '{self.model}': {len(request['messages'])} message(s), "
            f"{len(request.get('tools', []))} tool(s)."
        )
        if self.log_requests:
            logger.debug("Request payload: %s", json.dumps(request, default=str))

        try:
            # The message dicts are structurally compatible with the SDK's typed params
            response: ChatCompletion = await client.chat.completions.create(**cast(Dict[str, Any], request))
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise AuthError(f"Provider rejected the credential: {e}") from e
        except openai.APIStatusError as e:
            raise TransportError(f"Provider answered with status {e.status_code}: {e}") from e
        except openai.APIConnectionError as e:
            raise TransportError(f"Could not reach the provider: {e}") from e
        except (openai.APIResponseValidationError, json.JSONDecodeError) as e:
            raise MalformedReplyError(f"Provider reply could not be decoded: {e}") from e

        if self.log_responses:
            logger.debug("Response payload: %s", response.model_dump())

        return self._parse_response(response)

    def _build_request(self, history: Sequence[Turn], tools: Sequence[Tool]) -> Dict[str, Any]:
        """Assemble the chat completion request body."""
        messages: List[Dict[str, Any]] = []
        if self.sys_instruction:
            messages.append({"role": "system", "content": self.sys_instruction})
        messages.extend(self._convert_history(history))

        request: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        declarations = self._build_tool_declarations(tools)
        if declarations:
            request["tools"] = declarations
            request["tool_choice"] = "auto"
        return request

    @staticmethod
    def _build_tool_declarations(tools: Iterable[Tool]) -> List[Dict[str, Any]]:
        """
        Serializes tools into OpenAI function declarations.

        The tool's input schema is passed through verbatim. OpenAI expects a
        parameters object even when a tool takes no arguments.

        Args:
            tools: The active tools, in registration order.

        Returns:
            A list of ``{"type": "function", "function": {...}}`` dictionaries.
        """
        declarations = []
        for tool in tools:
            parameters = tool.describe() or dict(_EMPTY_PARAMETERS)
            declarations.append(
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": parameters,
                    },
                }
            )
        return declarations

    @staticmethod
    def _convert_history(history: Sequence[Turn]) -> List[Dict[str, Any]]:
        """
        Converts provider-agnostic turns to OpenAI message dictionaries.

        Args:
            history: The conversation turns, oldest first.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for turn in history:
            if isinstance(turn, UserTurn):
                openai_history.append({"role": "user", "content": turn.content})
            elif isinstance(turn, AssistantTurn):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": turn.content}
                if turn.tool_calls:
                    openai_msg["tool_calls"] = [
                        {
                            "id": call.call_id,
                            "type": "function",
                            "function": {"name": call.name, "arguments": call.raw_arguments},
                        }
                        for call in turn.tool_calls
                    ]
                openai_history.append(openai_msg)
            elif isinstance(turn, ToolResultTurn):
                openai_history.append(
                    {
                        "role": "tool",
                        "tool_call_id": turn.call_id,
                        "name": turn.name,
                        "content": json.dumps(turn.payload, default=str),
                    }
                )
        return openai_history

    @staticmethod
    def _parse_response(response: ChatCompletion) -> Decision:
        """
        Parses a chat completion into exactly one decision.

        A reply carrying tool calls becomes a ToolCallDecision for the first
        function call; any further calls are counted as dropped. Otherwise the
        reply text becomes a TextDecision.

        Args:
            response: The chat completion returned by the provider.

        Returns:
            The parsed decision.

        Raises:
            MalformedReplyError: If the reply has no usable message or the call
                arguments are not a JSON object.
        """
        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedReplyError("Provider reply contains no choices.")

        message = choices[0].message
        if message is None:
            raise MalformedReplyError("Provider reply contains no message.")

        tool_calls = [call for call in (message.tool_calls or []) if getattr(call, "type", "function") == "function"]
        if tool_calls:
            first = tool_calls[0]
            raw_arguments = first.function.arguments or ""
            arguments = OpenAIGateway._parse_arguments(first.function.name, raw_arguments)
            if len(tool_calls) > 1:
                logger.warning(
                    f"Reply requested {len(tool_calls)} tool calls; only '{first.function.name}' will be executed."
                )
            return ToolCallDecision(
                call_id=first.id,
                name=first.function.name,
                arguments=arguments,
                raw_arguments=raw_arguments or "{}",
                content=message.content or None,
                dropped_calls=len(tool_calls) - 1,
            )

        if message.content is None:
            raise MalformedReplyError("Provider reply has neither content nor tool calls.")

        logger.debug("Model answered with text.")
        return TextDecision(message=message.content)

    @staticmethod
    def _parse_arguments(tool_name: str, raw_arguments: str) -> Dict[str, Any]:
        """Decode the serialized call arguments.

        Raises:
            MalformedReplyError: If the arguments are not valid JSON, use NaN or Infinity, or not an object.
        """
        if not raw_arguments.strip():
            return {}
        try:
            parsed = json.loads(raw_arguments, parse_constant=_reject_constant)
        except ValueError as e:
            raise MalformedReplyError(f"Failed to decode arguments for '{tool_name}': {e}") from e

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise MalformedReplyError(f"Arguments for '{tool_name}' must decode to a JSON object.")
        return parsed
