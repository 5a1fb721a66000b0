"""
AI Mode: action generation - free text to an ordered list of candidate actions.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from ai_mode.errors import GenerationError
from ai_mode.schema import Action, GenerationOutput

logger = logging.getLogger(__name__)


def parse_generation_output(raw: Dict[str, Any]) -> GenerationOutput:
    """
    Shape-check the oracle's JSON. Anything that is not
    {"intent": str?, "actions": [ {"type": ..., "data": {...}}, ... ]} is a GenerationError.
    Domain checks (unknown kinds, bad ratings, ...) are left to the validator.
    """
    if not isinstance(raw, dict):
        raise GenerationError("Action output is not a JSON object")
    actions = raw.get("actions", [])
    if actions is None:
        actions = []
    if not isinstance(actions, list):
        raise GenerationError("Action output field 'actions' is not a list")

    parsed = []
    for i, item in enumerate(actions):
        if not isinstance(item, dict):
            raise GenerationError(f"Action {i} is not a JSON object")
        try:
            parsed.append(Action.model_validate(item))
        except ValidationError as e:
            raise GenerationError(f"Action {i} is malformed: {e.errors()[0]['msg']}")

    intent = raw.get("intent")
    return GenerationOutput(intent=intent if isinstance(intent, str) else "", actions=parsed)


def generate_actions(oracle, text: str, workspace: str) -> GenerationOutput:
    """Ask the oracle for actions. Raises GenerationError; nothing downstream runs on failure."""
    raw = oracle.generate_actions(text, workspace)
    output = parse_generation_output(raw)
    logger.info("Generated %d action(s) for %s workspace", len(output.actions), workspace)
    return output
