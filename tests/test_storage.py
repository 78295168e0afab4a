"""
Tests for JSON import/export and config validation
"""

import json

import pytest

from peoria.schemas import DEFAULT_CONFIG, AppState, CalculationResult, Player
from peoria.storage import (
    config_errors,
    export_to_json,
    get_default_state,
    import_from_json,
    is_valid_config,
)


def valid_config():
    return DEFAULT_CONFIG.model_dump(by_alias=True)


def test_default_config_is_valid():
    assert is_valid_config(valid_config())
    assert config_errors(valid_config()) == []


def test_default_state():
    state = get_default_state()
    assert state.players == []
    assert state.config == DEFAULT_CONFIG


@pytest.mark.parametrize("change", [
    lambda c: c.pop("par"),
    lambda c: c.update(par=[4] * 17),
    lambda c: c.update(par=["4"] * 18),
    lambda c: c.update(hiddenHoles="0,2,4"),
    lambda c: c.update(hiddenWeight=None),
    lambda c: c.update(multiplier="0.8"),
    lambda c: c.pop("limits"),
    lambda c: c.update(limits={"doubleParCut": "yes", "maxHdcp": 36}),
    lambda c: c.update(limits={"doubleParCut": True, "maxHdcp": True}),
])
def test_invalid_configs(change):
    config = valid_config()
    change(config)
    assert not is_valid_config(config)
    assert config_errors(config)


def test_config_must_be_object():
    assert config_errors(None) == ["config must be an object"]
    assert not is_valid_config([])


def test_export_uses_camel_case():
    state = AppState(config=DEFAULT_CONFIG, players=[Player(id="a", name="Ann", scores=[4] * 18, age=61)])
    data = json.loads(export_to_json(state))

    assert set(data) == {"config", "players"}
    assert data["config"]["hiddenHoles"] == DEFAULT_CONFIG.hidden_holes
    assert data["config"]["limits"] == {"doubleParCut": True, "maxHdcp": 999}
    assert data["config"]["roundingMode"] == "round"
    assert data["players"][0] == {"id": "a", "name": "Ann", "scores": [4] * 18, "age": 61}


def test_export_import_round_trip():
    state = AppState(
        config=DEFAULT_CONFIG.model_copy(update={"rounding_mode": "ceil", "multiplier": 0.25}),
        players=[
            Player(id="a", name="Ann", scores=[4] * 18, age=61),
            Player(id="b", name="Bob", scores=[5, 6, 0]),
        ],
    )
    assert import_from_json(export_to_json(state)) == state


def test_import_original_document_shape():
    text = json.dumps({
        "config": {
            "par": [4] * 18,
            "hiddenHoles": [0, 2, 4],
            "hiddenWeight": 1.5,
            "multiplier": 0.8,
            "limits": {"doubleParCut": False, "maxHdcp": 36},
            "roundingMode": "floor",
        },
        "players": [{"id": "p1", "name": "Pat", "scores": []}],
    })
    state = import_from_json(text)

    assert state is not None
    assert state.config.limits.max_hdcp == 36
    assert state.config.limits.double_par_cut is False
    assert state.config.rounding_mode == "floor"
    assert state.players[0].age is None


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    json.dumps({"players": []}),
    json.dumps({"config": {"par": [4] * 18}, "players": []}),
    json.dumps({"config": DEFAULT_CONFIG.model_dump(by_alias=True), "players": {}}),
    json.dumps({"config": DEFAULT_CONFIG.model_dump(by_alias=True), "players": [{"name": "no id"}]}),
    json.dumps({"config": {**DEFAULT_CONFIG.model_dump(by_alias=True), "roundingMode": "up"}, "players": []}),
])
def test_import_rejects_bad_documents(text):
    assert import_from_json(text) is None


def test_results_round_trip_through_json():
    result = CalculationResult(
        player_id="a", player_name="Ann", gross=90, hidden_total=60,
        hdcp=14.4, net=75.6, rank=1, previous_rank=3,
    )
    data = json.loads(result.model_dump_json(by_alias=True))

    assert data["playerId"] == "a"
    assert data["previousRank"] == 3
    assert CalculationResult.model_validate(data) == result
