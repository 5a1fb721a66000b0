"""
AI Mode: the text-to-SQL / text-to-JSON oracle.

The pipeline only depends on two calls:
    generate_sql(text, workspace)     -> {"sql", "explanation", "visualization"?}
    generate_actions(text, workspace) -> {"intent", "actions": [...]}
Both return plain decoded JSON objects and raise GenerationError when the model
is unreachable or its output is not a JSON object. Tests substitute a fake with
the same two methods.
"""

import json
import logging
from datetime import date
from typing import Any, Dict

from ai_mode.errors import GenerationError
from ai_mode.llm.client import get_ai_client, get_ai_model
from ai_mode.llm.schema import get_schema_context
from ai_mode.prompts.prompt_ai_mode import (
    ACTION_GENERATION_PROMPT,
    FOOD_ACTION_FIELDS,
    MEDIA_ACTION_FIELDS,
    SQL_GENERATION_PROMPT,
    WORKSPACE_CONTEXT,
)

logger = logging.getLogger(__name__)

_ACTION_FIELDS = {"media": MEDIA_ACTION_FIELDS, "food": FOOD_ACTION_FIELDS}


def _strip_fences(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("```json"):
        raw = raw.replace("```json", "", 1)
    elif raw.startswith("```"):
        raw = raw.replace("```", "", 1)
    if raw.rstrip().endswith("```"):
        raw = raw.rstrip()[:-3]
    return raw.strip()


def parse_json_object(raw: Any) -> Dict[str, Any]:
    """Decode model output into a dict or raise GenerationError."""
    if not isinstance(raw, str) or not raw.strip():
        raise GenerationError("The model returned an empty response")
    try:
        parsed = json.loads(_strip_fences(raw))
    except json.JSONDecodeError as e:
        raise GenerationError(f"The model returned invalid JSON: {e}")
    if not isinstance(parsed, dict):
        raise GenerationError("The model returned JSON that is not an object")
    return parsed


class OpenAIOracle:
    """Oracle backed by the OpenAI chat completions API (JSON mode, temperature 0)."""

    def __init__(self, conn=None, client=None, model: str = None):
        self.client = client if client is not None else get_ai_client(conn)
        self.model = model or get_ai_model(conn)

    def _complete_json(self, system_prompt: str, text: str) -> Dict[str, Any]:
        if self.client is None:
            raise GenerationError("API Key not configured. Please add an OpenAI API Key in Configuration.")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": text},
                ],
                temperature=0,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            logger.warning("OpenAI request failed: %s", e)
            raise GenerationError(f"The language model is unavailable: {e}") from e
        return parse_json_object(response.choices[0].message.content)

    def generate_sql(self, text: str, workspace: str) -> Dict[str, Any]:
        prompt = SQL_GENERATION_PROMPT.format(
            workspace_context=WORKSPACE_CONTEXT[workspace],
            schema=get_schema_context(),
        )
        return self._complete_json(prompt, text)

    def generate_actions(self, text: str, workspace: str) -> Dict[str, Any]:
        prompt = ACTION_GENERATION_PROMPT.format(
            workspace_context=WORKSPACE_CONTEXT[workspace],
            today=date.today().isoformat(),
            fields=_ACTION_FIELDS[workspace],
        )
        return self._complete_json(prompt, text)
