import logging
import random
from typing import Optional

from fastapi import FastAPI, Request, Depends, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from sqlalchemy.orm import Session

from .db import Base, engine, get_db
from . import crud, schemas
from .peoria_calc import (
    ConfigurationError,
    calculate_all_results,
    generate_random_hidden_holes,
    get_booby_rank,
)
from .routers import public
from .storage import config_errors, export_to_json, get_default_state, import_from_json


logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)


app = FastAPI(title="New Peoria")

app.include_router(public.router)


@app.exception_handler(ConfigurationError)
def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.warning("configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ---------------------------------------------------------------------------------

@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/public")


#--------------------------------------------------------------------------------
#------------------------------- API: CALCULATION --------------------------------
#--------------------------------------------------------------------------------


@app.post("/api/results", response_model=list[schemas.CalculationResult])
def api_results(body: schemas.CalculationRequest):
    return calculate_all_results(body.players, body.config, body.previous_results)


@app.post("/api/booby-rank")
def api_booby_rank(results: list[schemas.CalculationResult]):
    return {"boobyRank": get_booby_rank(results)}


@app.get("/api/hidden-holes/random")
def api_random_hidden_holes(seed: Optional[int] = None):
    rng = random.Random(seed) if seed is not None else None
    return {"hiddenHoles": generate_random_hidden_holes(rng)}


#--------------------------------------------------------------------------------
#--------------------------------- API: STATE -----------------------------------
#--------------------------------------------------------------------------------


@app.get("/api/state", response_model=schemas.AppState)
def api_get_state(db: Session = Depends(get_db)):
    return crud.load_state(db) or get_default_state()


@app.put("/api/state", response_model=list[schemas.CalculationResult])
def api_put_state(state: schemas.AppState, db: Session = Depends(get_db)):
    errors = config_errors(state.config.model_dump(by_alias=True))
    if errors:
        raise HTTPException(status_code=422, detail=errors)
    return crud.save_state(db, state)


@app.delete("/api/state")
def api_clear_state(db: Session = Depends(get_db)):
    return {"cleared": crud.clear_state(db)}


@app.get("/api/state/results", response_model=list[schemas.CalculationResult])
def api_state_results(db: Session = Depends(get_db)):
    return crud.load_results(db)


@app.get("/api/state/export")
def api_export_state(db: Session = Depends(get_db)):
    state = crud.load_state(db) or get_default_state()
    return PlainTextResponse(export_to_json(state), media_type="application/json")


@app.post("/api/state/import", response_model=list[schemas.CalculationResult])
async def api_import_state(request: Request, db: Session = Depends(get_db)):
    text = (await request.body()).decode("utf-8", errors="replace")
    state = import_from_json(text)
    if state is None:
        raise HTTPException(status_code=400, detail="Invalid competition data")

    logger.info("imported state with %d players", len(state.players))
    return crud.save_state(db, state)


# ---------------------------------------------------------------------------


@app.get("/health")
def health():
    return {"status": "ok"}
