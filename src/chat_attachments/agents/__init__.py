"""LLM agent connections that accept attachment content blocks."""

from .agent_connection import AgentConnection, AnthropicAgent, LiteLLMAgent, OpenAIAgent

__all__ = ["AgentConnection", "LiteLLMAgent", "OpenAIAgent", "AnthropicAgent"]
