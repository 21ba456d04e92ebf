"""Provider integrations."""

from .openrouter_client import ChatClient, ModelConfig, build_chat_client

__all__ = ["ChatClient", "ModelConfig", "build_chat_client"]
