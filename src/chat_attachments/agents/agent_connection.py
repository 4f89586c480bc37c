"""Agent connection classes for sending attachment content to an LLM."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from litellm import completion

from chat_attachments.files.models import ContentBlock


class AgentConnection(ABC):
    """Abstract base class for LLM agent connections."""

    @abstractmethod
    def query(self, message: str, system_message: str | None = None) -> str:
        """Send a plain text query to the LLM and return the response.

        Args:
            message: The user message to send
            system_message: Optional system message to set context

        Returns:
            The LLM's response as a string
        """
        pass

    @abstractmethod
    def query_with_content(
        self,
        blocks: Sequence[ContentBlock],
        system_message: str | None = None,
    ) -> str:
        """Send a multimodal user message built from content blocks.

        Args:
            blocks: Ordered text and image blocks forming the user message
            system_message: Optional system message to set context

        Returns:
            The LLM's response as a string
        """
        pass


class LiteLLMAgent(AgentConnection):
    """LLM agent using LiteLLM for multi-provider support."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        max_tokens: int = 1000,
    ):
        """Initialize the LiteLLM agent.

        Args:
            model: The model name (e.g., 'gpt-4o', 'claude-3-5-sonnet-20241022')
            api_key: The API key for authentication
            max_tokens: Maximum tokens for response (default: 1000)

        Raises:
            ValueError: If model or api_key is None
        """
        if model is None:
            raise ValueError("Model is required")
        if api_key is None:
            raise ValueError("API key is required")

        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens

    def query(self, message: str, system_message: str | None = None) -> str:
        """Send a query to the LLM using LiteLLM."""
        return self._complete(message, system_message)

    def query_with_content(
        self,
        blocks: Sequence[ContentBlock],
        system_message: str | None = None,
    ) -> str:
        """Send content blocks as one user message using LiteLLM.

        Raises:
            ValueError: If ``blocks`` is empty
        """
        if not blocks:
            raise ValueError("At least one content block is required")
        content = [block.to_litellm() for block in blocks]
        return self._complete(content, system_message)

    def _complete(
        self,
        content: str | list[dict[str, Any]],
        system_message: str | None,
    ) -> str:
        messages: list[dict[str, Any]] = []
        if system_message:
            messages.append({"role": "system", "content": system_message})
        messages.append({"role": "user", "content": content})

        response = completion(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
            api_key=self.api_key,
        )
        return str(response.choices[0].message.content or "")


class OpenAIAgent(LiteLLMAgent):
    """Convenience class for OpenAI models with sensible defaults."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        max_tokens: int = 1000,
    ):
        """Initialize OpenAI agent with default model.

        Args:
            model: OpenAI model name (default: 'gpt-4o-mini')
            api_key: OpenAI API key
            max_tokens: Maximum tokens for response
        """
        super().__init__(model=model, api_key=api_key, max_tokens=max_tokens)


class AnthropicAgent(LiteLLMAgent):
    """Convenience class for Anthropic models with sensible defaults."""

    def __init__(
        self,
        model: str = "claude-3-5-sonnet-20241022",
        api_key: str | None = None,
        max_tokens: int = 1000,
    ):
        """Initialize Anthropic agent with default model.

        Args:
            model: Anthropic model name (default: 'claude-3-5-sonnet-20241022')
            api_key: Anthropic API key
            max_tokens: Maximum tokens for response
        """
        super().__init__(model=model, api_key=api_key, max_tokens=max_tokens)
