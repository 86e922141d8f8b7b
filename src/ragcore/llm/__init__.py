"""Generation capability."""

from .base import BaseLLM
from .providers.openai import OpenAIChatLLM

__all__ = ["BaseLLM", "OpenAIChatLLM"]
