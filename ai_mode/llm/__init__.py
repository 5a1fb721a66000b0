"""AI Mode: LLM calls (client, schema context, text-to-JSON oracle)."""

from ai_mode.llm.client import get_ai_client, get_ai_model
from ai_mode.llm.oracle import OpenAIOracle, parse_json_object
from ai_mode.llm.schema import clear_schema_cache, get_schema_context

__all__ = [
    "OpenAIOracle",
    "clear_schema_cache",
    "get_ai_client",
    "get_ai_model",
    "get_schema_context",
    "parse_json_object",
]
