"""Tests for game state serialization."""

import json

from questboard.utils.serialization import serialize_state

from game_helpers import ScriptedRNG, arm_trap, create_engine, make_enemy, make_item


def test_snapshot_is_json_serializable():
    engine, _ = create_engine(kinds=["start", "battle"] + ["normal"] * 7 + ["castle"], rng=ScriptedRNG(rolls=[1]))
    engine.state.current_player.inventory.append(make_item())
    engine.roll_dice()
    engine.select_tile(1)

    snapshot = serialize_state(engine.state, "game-test")
    assert json.loads(json.dumps(snapshot)) == snapshot


def test_top_level_fields():
    engine, _ = create_engine(rng=ScriptedRNG(rolls=[4]))
    engine.roll_dice()

    snapshot = serialize_state(engine.state, "game-test")

    assert snapshot["session_id"] == "game-test"
    assert snapshot["turn_id"] == 0
    assert snapshot["phase"] == "selecting_tile"
    assert snapshot["current_player_id"] == "p1"
    assert snapshot["dice_value"] == 4
    assert snapshot["available_positions"] == [1, 2, 3, 4]
    assert snapshot["path_length"] == 10
    assert len(snapshot["board"]) == 10
    assert snapshot["winner"] is None
    assert snapshot["completion"] is None


def test_player_includes_effective_stats():
    engine, _ = create_engine()
    player = engine.state.current_player
    player.equipped["weapon"] = make_item(stats=20)

    data = serialize_state(engine.state)["players"][0]

    assert data["total_stats"]["attack"] == 30
    assert data["equipped"]["weapon"]["stats"] == 20
    assert data["stats"] == {"battles_won": 0, "tiles_moved_total": 0, "gold_collected": 0}


def test_battle_rounds():
    engine, _ = create_engine(kinds=["start", "battle"] + ["normal"] * 7 + ["castle"], rng=ScriptedRNG(rolls=[1, 15, 1]))
    engine.roll_dice()
    engine.select_tile(1)

    battle = serialize_state(engine.state)["current_battle"]

    assert battle["phase"] == "player_attack"
    assert battle["current_round"] == 1
    assert battle["rounds"][0]["player_roll"]["value"] == 15
    assert battle["enemy"]["name"] == "Goblin Scout"


def test_finished_battle_keeps_only_its_rounds():
    engine, _ = create_engine(
        kinds=["start", "battle"] + ["normal"] * 7 + ["castle"],
        rng=ScriptedRNG(rolls=[1, 15, 1, 15, 6]),
        enemy=make_enemy(health=5),
    )
    engine.roll_dice()
    engine.select_tile(1)
    engine.attack()

    snapshot = serialize_state(engine.state)

    assert snapshot["phase"] == "reward"
    assert snapshot["current_battle"] is None
    assert len(snapshot["last_battle_rounds"]) == 2
    assert snapshot["last_battle_rounds"][-1]["damage"] == 7
    assert snapshot["current_reward"]["id"] == "enemy-test-loot"


def test_trap_tiles():
    engine, _ = create_engine()
    arm_trap(engine.tile_at(3), "item_loss", power=0, owner="p2")

    tile = serialize_state(engine.state)["board"][3]

    assert tile["kind"] == "trap"
    assert tile["trap"]["kind"] == "item_loss"
    assert tile["trap"]["owner_id"] == "p2"


def test_snapshot_is_detached():
    engine, _ = create_engine()
    snapshot = engine.snapshot()
    snapshot["players"][0]["position"] = 7
    snapshot["board"].clear()

    assert engine.state.current_player.position == 0
    assert engine.snapshot()["board"]


def test_completion_after_win():
    engine, _ = create_engine(rng=ScriptedRNG(rolls=[1]))
    engine.state.current_player.position = 8
    engine.roll_dice()
    engine.select_tile(9)

    snapshot = engine.snapshot()
    assert snapshot["winner"] == "p1"
    assert snapshot["completion"]["success"]
    assert snapshot["completion"]["orbs_awarded"] == 2
