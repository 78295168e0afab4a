import logging
import os

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from . import models
from .peoria_calc import calculate_all_results
from .schemas import AppState, CalculationResult
from .storage import export_to_json, import_from_json


logger = logging.getLogger(__name__)

DEFAULT_SLOT = os.getenv("PEORIA_STATE_SLOT", "peoria-slider-data")

results_adapter = TypeAdapter(list[CalculationResult])


def get_saved_state(db: Session, slot: str = DEFAULT_SLOT):
    return db.query(models.SavedState).filter(models.SavedState.slot == slot).first()


def load_state(db: Session, slot: str = DEFAULT_SLOT) -> AppState | None:
    row = get_saved_state(db, slot)
    if not row:
        return None

    state = import_from_json(row.state_json)
    if state is None:
        logger.warning("stored state in slot %r is unreadable", slot)
    return state


def load_results(db: Session, slot: str = DEFAULT_SLOT) -> list[CalculationResult]:
    row = get_saved_state(db, slot)
    if not row:
        return []

    try:
        return results_adapter.validate_json(row.results_json)
    except ValidationError:
        logger.warning("stored results in slot %r are unreadable", slot)
        return []


def save_state(db: Session, state: AppState, slot: str = DEFAULT_SLOT) -> list[CalculationResult]:
    """
    Store the state and recompute its ranking. The results stored by the
    previous save provide previousRank for the new ones.
    """
    previous = load_results(db, slot)
    results = calculate_all_results(state.players, state.config, previous)

    row = get_saved_state(db, slot)
    if not row:
        row = models.SavedState(slot=slot)
        db.add(row)

    row.state_json = export_to_json(state)
    row.results_json = results_adapter.dump_json(results, by_alias=True).decode()
    db.commit()

    logger.info("saved slot %r: %d players, %d ranked", slot, len(state.players), len(results))
    return results


def clear_state(db: Session, slot: str = DEFAULT_SLOT) -> bool:
    row = get_saved_state(db, slot)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True
