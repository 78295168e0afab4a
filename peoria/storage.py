import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from .schemas import AppState, DEFAULT_CONFIG


logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but true/false is not a number in the document
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def config_errors(config: Any) -> list[str]:
    """
    Structural check of a decoded config document (camelCase keys).
    Returns a list of problems, empty when the config is usable.
    """
    if not isinstance(config, dict):
        return ["config must be an object"]

    errors = []

    par = config.get("par")
    if not isinstance(par, list) or len(par) != 18:
        errors.append("par must be a list of 18 values")
    elif not all(_is_number(p) for p in par):
        errors.append("par values must be numbers")

    if not isinstance(config.get("hiddenHoles"), list):
        errors.append("hiddenHoles must be a list")
    if not _is_number(config.get("hiddenWeight")):
        errors.append("hiddenWeight must be a number")
    if not _is_number(config.get("multiplier")):
        errors.append("multiplier must be a number")

    limits = config.get("limits")
    if not isinstance(limits, dict):
        errors.append("limits must be an object")
    else:
        if not isinstance(limits.get("doubleParCut"), bool):
            errors.append("limits.doubleParCut must be a boolean")
        if not _is_number(limits.get("maxHdcp")):
            errors.append("limits.maxHdcp must be a number")

    return errors


def is_valid_config(config: Any) -> bool:
    return not config_errors(config)


def get_default_state() -> AppState:
    return AppState(config=DEFAULT_CONFIG, players=[])


def export_to_json(state: AppState) -> str:
    return state.model_dump_json(by_alias=True, indent=2)


def parse_state(data: Any) -> Optional[AppState]:
    """Validate an already decoded {config, players} document."""
    if not isinstance(data, dict):
        return None

    errors = config_errors(data.get("config"))
    if errors:
        logger.warning("rejected state, invalid config: %s", "; ".join(errors))
        return None

    if not isinstance(data.get("players"), list):
        logger.warning("rejected state, players is not a list")
        return None

    try:
        return AppState.model_validate(data)
    except ValidationError as e:
        logger.warning("rejected state: %s", e)
        return None


def import_from_json(text: str) -> Optional[AppState]:
    try:
        data = json.loads(text)
    except ValueError:
        logger.warning("rejected state, not valid JSON")
        return None
    return parse_state(data)
