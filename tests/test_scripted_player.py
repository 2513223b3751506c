"""Tests for the scripted AI opponent."""

from dataclasses import replace

from questboard.agent.scripted_player import ScriptedPlayer
from questboard.models.battle import BattleState
from questboard.models.game_state import GameState
from questboard.models.player import Stats
from questboard.utils.constants import AI_CONTINUE_DELAY, AI_END_TURN_DELAY, AI_ROLL_DELAY

from game_helpers import ScriptedRNG, make_board, make_enemy, make_item, make_player, make_potion


def create_state(phase="rolling", **kwargs):
    player = make_player("p1", name="Bot", is_ai=True)
    board = make_board(["start"] + ["normal"] * 8 + ["castle"])
    return GameState(players=[player, make_player("p2")], board=board, current_player_id="p1", phase=phase, **kwargs)


def create_battle(player_health):
    return BattleState(
        enemy=make_enemy(),
        player_health=player_health,
        player_max_health=100,
        enemy_health=30,
        enemy_max_health=30,
        player_stats=Stats(10, 10, 100, 10),
        phase="player_attack",
    )


class TestRolling:
    def test_rolls_with_nothing_to_equip(self):
        action = ScriptedPlayer(ScriptedRNG()).choose_action(create_state())
        assert action.type == "roll_dice"

    def test_equips_better_gear_first(self):
        state = create_state()
        player = state.current_player
        player.equipped["weapon"] = make_item("item-old", stats=10)
        player.inventory.extend([make_potion(), make_item("item-new", stats=25)])

        action = ScriptedPlayer(ScriptedRNG()).choose_action(state)
        assert action.type == "equip_item"
        assert action.item_id == "item-new"

    def test_ignores_weaker_gear(self):
        state = create_state()
        player = state.current_player
        player.equipped["weapon"] = make_item("item-old", stats=25)
        player.inventory.append(make_item("item-weak", stats=10))

        action = ScriptedPlayer(ScriptedRNG()).choose_action(state)
        assert action.type == "roll_dice"


class TestSelectingTile:
    def test_takes_castle_when_reachable(self):
        state = create_state(phase="selecting_tile", dice_value=3, available_positions=[5, 6, 7, 9])
        state.current_player.position = 8

        action = ScriptedPlayer(ScriptedRNG()).choose_action(state)
        assert action.type == "select_tile"
        assert action.position == 9

    def test_random_legal_tile_otherwise(self):
        state = create_state(phase="selecting_tile", dice_value=2, available_positions=[1, 2])
        policy = ScriptedPlayer(ScriptedRNG(seed=3))

        for _ in range(20):
            assert policy.choose_action(state).position in (1, 2)


class TestBattle:
    def test_attacks_when_healthy(self):
        state = create_state(phase="battle", current_battle=create_battle(80))
        state.current_player.inventory.append(make_potion())

        assert ScriptedPlayer(ScriptedRNG()).choose_action(state).type == "attack"

    def test_drinks_strongest_potion_when_low(self):
        state = create_state(phase="battle", current_battle=create_battle(20))
        state.current_player.inventory.extend([make_potion("item-small", 15), make_potion("item-big", 60)])

        action = ScriptedPlayer(ScriptedRNG()).choose_action(state)
        assert action.type == "use_item"
        assert action.item_id == "item-big"

    def test_attacks_when_low_without_potions(self):
        state = create_state(phase="battle", current_battle=create_battle(20))
        assert ScriptedPlayer(ScriptedRNG()).choose_action(state).type == "attack"

    def test_waits_for_enemy_turn(self):
        battle = replace(create_battle(80), phase="enemy_attack")
        state = create_state(phase="battle", current_battle=battle)
        assert ScriptedPlayer(ScriptedRNG()).choose_action(state) is None


class TestFinishing:
    def test_acknowledges_reward(self):
        state = create_state(phase="reward", current_reward=make_item())
        assert ScriptedPlayer(ScriptedRNG()).choose_action(state).type == "acknowledge_reward"

    def test_continues_below_probability(self):
        state = create_state(phase="finishing", can_continue=True)
        action = ScriptedPlayer(ScriptedRNG(randoms=[0.5])).choose_action(state)
        assert action.type == "continue_turn"

    def test_ends_above_probability(self):
        state = create_state(phase="finishing", can_continue=True)
        action = ScriptedPlayer(ScriptedRNG(randoms=[0.9])).choose_action(state)
        assert action.type == "end_turn"

    def test_ends_when_cannot_continue(self):
        state = create_state(phase="finishing", can_continue=False)
        assert ScriptedPlayer(ScriptedRNG(randoms=[0.0])).choose_action(state).type == "end_turn"


def test_delays_by_phase():
    policy = ScriptedPlayer(ScriptedRNG())
    assert policy.delay_for(create_state()) == AI_ROLL_DELAY
    assert policy.delay_for(create_state(phase="finishing", can_continue=True)) == AI_CONTINUE_DELAY
    assert policy.delay_for(create_state(phase="finishing")) == AI_END_TURN_DELAY
