from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


RoundingMode = Literal["round", "floor", "ceil"]


class CamelModel(BaseModel):
    # JSON documents use camelCase keys, Python code uses snake_case
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Limits(CamelModel):
    double_par_cut: bool = True
    max_hdcp: float = 999


class CompetitionConfig(CamelModel):
    par: list[int]
    hidden_holes: list[int]
    hidden_weight: float = 1.5
    multiplier: float = 0.8
    limits: Limits = Limits()
    rounding_mode: RoundingMode = "round"


class Player(CamelModel):
    id: str
    name: str
    scores: list[int] = Field(default_factory=list)
    age: Optional[int] = None


class PlayerResult(CamelModel):
    """Result of a single player before ranking."""
    player_id: str
    player_name: str
    gross: int
    hidden_total: int
    hdcp: float
    net: float


class CalculationResult(PlayerResult):
    rank: int
    previous_rank: Optional[int] = None


class AppState(CamelModel):
    config: CompetitionConfig
    players: list[Player] = Field(default_factory=list)


class CalculationRequest(CamelModel):
    config: CompetitionConfig
    players: list[Player] = Field(default_factory=list)
    previous_results: Optional[list[CalculationResult]] = None


# 12 hidden holes, 0-indexed
DEFAULT_HIDDEN_HOLES = [0, 2, 4, 6, 8, 10, 9, 11, 13, 15, 16, 17]

# standard new Peoria holes, 1-indexed for display
STANDARD_NEW_PEORIA_HOLES = [1, 3, 5, 7, 9, 11, 10, 12, 14, 16, 17, 18]

HDCP_LIMIT_OPTIONS = [
    {"value": 999, "label": "Unlimited"},
    {"value": 36, "label": "36 (men)"},
    {"value": 40, "label": "40 (women)"},
    {"value": 72, "label": "72 (double cut)"},
]

DEFAULT_CONFIG = CompetitionConfig(
    par=[4, 4, 3, 5, 4, 4, 3, 5, 4, 4, 4, 3, 5, 4, 4, 3, 5, 4],  # par 72
    hidden_holes=DEFAULT_HIDDEN_HOLES,
    hidden_weight=1.5,
    multiplier=0.8,
    limits=Limits(double_par_cut=True, max_hdcp=999),
    rounding_mode="round",
)
