"""OpenAI-compatible backend family (openai, deepseek, ollama).

The generator itself lives in ``openai_compat.generator`` and is imported
lazily by the factory.
"""

from .aliases import ALIAS_PROFILES, AliasProfile, profile_for
from .wire import OpenAIChatCompletion, OpenAIChatRequest, OpenAIStreamChunk
from .request_translator import convert_schema, map_sampling, to_messages, to_provider_request
from .response_assembler import assemble_response, build_call, parse_arguments, response_from_completion

__all__ = [
    "ALIAS_PROFILES",
    "AliasProfile",
    "profile_for",
    "OpenAIChatCompletion",
    "OpenAIChatRequest",
    "OpenAIStreamChunk",
    "convert_schema",
    "map_sampling",
    "to_messages",
    "to_provider_request",
    "assemble_response",
    "build_call",
    "parse_arguments",
    "response_from_completion",
]
