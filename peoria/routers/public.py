# peoria/routers/public.py

from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from peoria.db import get_db
from peoria.templating import templates
from peoria import crud
from peoria.peoria_calc import get_booby_rank, get_last_rank, rank_change, is_complete

router = APIRouter()

BADGES = {1: "🥇", 2: "🥈", 3: "🥉"}


def rank_class(rank: int, booby_rank: int | None, last_rank: int | None) -> str:
    if rank in BADGES:
        return f"rank-{rank}"
    if rank == booby_rank:
        return "rank-booby"
    if rank == last_rank:
        return "rank-last"
    return ""


def rank_badge(rank: int, booby_rank: int | None, last_rank: int | None) -> str | None:
    if rank in BADGES:
        return BADGES[rank]
    if rank == booby_rank:
        return "BB"
    if rank == last_rank:
        return "💀"
    return None


@router.get("/public", response_class=HTMLResponse)
def public_results(request: Request, db: Session = Depends(get_db)):
    state = crud.load_state(db)
    results = crud.load_results(db)

    booby_rank = get_booby_rank(results)
    last_rank = get_last_rank(results)

    rows = [
        {
            "result": r,
            "css": rank_class(r.rank, booby_rank, last_rank),
            "badge": rank_badge(r.rank, booby_rank, last_rank),
            "change": rank_change(r),
        }
        for r in results
    ]

    players_total = len(state.players) if state else 0
    players_ready = sum(1 for p in state.players if is_complete(p)) if state else 0

    return templates.TemplateResponse(
        request,
        "results.html",
        {
            "rows": rows,
            "players_total": players_total,
            "players_pending": players_total - players_ready,
        }
    )
