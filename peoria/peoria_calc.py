import logging
import math
import random
from typing import Callable, Iterable, Optional, Sequence

from .schemas import CalculationResult, CompetitionConfig, Player, PlayerResult


logger = logging.getLogger(__name__)

HOLES = 18
FRONT_HOLES = list(range(0, 9))
BACK_HOLES = list(range(9, 18))
HIDDEN_PER_HALF = 6


class ConfigurationError(ValueError):
    """Competition configuration that cannot produce a valid handicap."""


# ---------------------------------------------------------------------------
# Score aggregation
# ---------------------------------------------------------------------------

def gross_total(scores: Sequence[int]) -> int:
    return sum(scores)


def front_total(scores: Sequence[int]) -> int:
    return sum(scores[0:9])


def back_total(scores: Sequence[int]) -> int:
    return sum(scores[9:18])


def course_par(par: Sequence[int]) -> int:
    return sum(par)


def apply_double_par_cut(score: int, par: int, enabled: bool) -> int:
    if not enabled:
        return score
    return min(score, par * 2)


def hidden_total(scores: Sequence[int], hidden_holes: Iterable[int],
                 par: Sequence[int], double_par_cut: bool) -> int:
    """
    Sum of the hidden hole scores, each one capped at double par when
    double_par_cut is on. Indices outside the score card are skipped.
    """
    total = 0
    for hole in hidden_holes:
        if 0 <= hole < len(scores):
            total += apply_double_par_cut(scores[hole], par[hole], double_par_cut)
    return total


def hidden_holes_par(hidden_holes: Iterable[int], par: Sequence[int]) -> int:
    return sum(par[h] for h in hidden_holes if 0 <= h < len(par))


# ---------------------------------------------------------------------------
# Handicap
# ---------------------------------------------------------------------------

def apply_rounding(value: float, mode: str) -> float:
    """
    Round to one decimal place.

    "round" goes half up (2.25 -> 2.3, -2.25 -> -2.2). The scaled value is
    snapped to 9 decimals first so float noise like 144.00000000000003
    does not push ceil/floor to the next tenth.
    """
    scaled = round(value * 10, 9)

    if mode == "floor":
        rounded = math.floor(scaled)
    elif mode == "ceil":
        rounded = math.ceil(scaled)
    elif mode == "round":
        rounded = math.floor(scaled + 0.5)
    else:
        raise ConfigurationError(f"unknown rounding mode: {mode!r}")

    return rounded / 10


def calculate_hdcp(hidden_total: int, hidden_weight: float, course_par: int,
                   multiplier: float, max_hdcp: float, rounding_mode: str) -> float:
    # HDCP = (hidden total * weight - course par) * multiplier
    raw_hdcp = (hidden_total * hidden_weight - course_par) * multiplier
    rounded = apply_rounding(raw_hdcp, rounding_mode)

    # upper limit only, negative handicaps are allowed
    return min(rounded, max_hdcp)


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

def is_complete(player: Player) -> bool:
    return len(player.scores) == HOLES and all(s > 0 for s in player.scores)


def check_config(config: CompetitionConfig) -> None:
    if len(config.par) != HOLES:
        raise ConfigurationError(
            f"par must list {HOLES} holes, got {len(config.par)}"
        )


def calculate_player_result(player: Player, config: CompetitionConfig) -> PlayerResult:
    check_config(config)

    gross = gross_total(player.scores)
    hidden = hidden_total(
        player.scores,
        config.hidden_holes,
        config.par,
        config.limits.double_par_cut,
    )
    hdcp = calculate_hdcp(
        hidden,
        config.hidden_weight,
        course_par(config.par),
        config.multiplier,
        config.limits.max_hdcp,
        config.rounding_mode,
    )

    return PlayerResult(
        player_id=player.id,
        player_name=player.name,
        gross=gross,
        hidden_total=hidden,
        hdcp=hdcp,
        net=gross - hdcp,
    )


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

SortKey = Callable[[PlayerResult, Optional[int]], tuple]
SameRank = Callable[[PlayerResult, PlayerResult], bool]


def result_sort_key(result: PlayerResult, age: Optional[int]) -> tuple:
    # net asc, hdcp asc, age desc (older wins, missing = 0), gross asc
    return (result.net, result.hdcp, -(age or 0), result.gross)


def same_rank(a: PlayerResult, b: PlayerResult) -> bool:
    # age only orders, it does not split a shared rank
    return a.net == b.net and a.hdcp == b.hdcp and a.gross == b.gross


def calculate_all_results(
    players: Sequence[Player],
    config: CompetitionConfig,
    previous_results: Optional[Sequence[CalculationResult]] = None,
    *,
    sort_key: SortKey = result_sort_key,
    same_rank: SameRank = same_rank,
) -> list[CalculationResult]:
    check_config(config)

    eligible = [p for p in players if is_complete(p)]
    if len(eligible) < len(players):
        logger.debug("skipping %d incomplete players", len(players) - len(eligible))

    scored = [(calculate_player_result(p, config), p.age) for p in eligible]

    # sorted() is stable, fully tied players keep their input order
    scored = sorted(scored, key=lambda item: sort_key(item[0], item[1]))

    previous_ranks: dict[str, int] = {}
    for prev in previous_results or []:
        previous_ranks.setdefault(prev.player_id, prev.rank)

    ranked: list[CalculationResult] = []
    current_rank = 1
    for index, (result, _age) in enumerate(scored):
        if index > 0 and not same_rank(result, scored[index - 1][0]):
            current_rank = index + 1

        ranked.append(CalculationResult(
            **result.model_dump(),
            rank=current_rank,
            previous_rank=previous_ranks.get(result.player_id),
        ))

    logger.debug("ranked %d of %d players", len(ranked), len(players))
    return ranked


def get_booby_rank(results: Sequence[CalculationResult]) -> Optional[int]:
    """Rank value second from the bottom, None with fewer than 2 results."""
    if len(results) < 2:
        return None
    by_rank_desc = sorted(results, key=lambda r: r.rank, reverse=True)
    return by_rank_desc[1].rank


def get_last_rank(results: Sequence[CalculationResult]) -> Optional[int]:
    if not results:
        return None
    return max(r.rank for r in results)


def rank_change(result: CalculationResult) -> Optional[str]:
    if result.previous_rank is None:
        return None
    if result.rank < result.previous_rank:
        return "up"
    if result.rank > result.previous_rank:
        return "down"
    return "same"


# ---------------------------------------------------------------------------
# Hidden holes
# ---------------------------------------------------------------------------

def _shuffle(holes: Sequence[int], rng) -> list[int]:
    # Fisher-Yates
    result = list(holes)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def generate_random_hidden_holes(rng=None) -> list[int]:
    """
    Pick 12 hidden holes, 6 from the front nine and 6 from the back nine,
    returned sorted. rng needs a randrange(n) method; pass a seeded
    random.Random for a reproducible draw.
    """
    if rng is None:
        rng = random.Random()

    front = _shuffle(FRONT_HOLES, rng)[:HIDDEN_PER_HALF]
    back = _shuffle(BACK_HOLES, rng)[:HIDDEN_PER_HALF]

    return sorted(front + back)
