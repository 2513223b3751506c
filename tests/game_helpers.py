"""Shared builders for engine tests: hand-made boards, players and forced dice."""

from questboard.engine.ledger import InMemoryRewardsLedger
from questboard.engine.scheduler import ManualScheduler
from questboard.engine.turn_engine import TurnEngine
from questboard.models.game_state import GameState
from questboard.models.item import Enemy, Item, Trap
from questboard.models.player import Player, Stats
from questboard.models.tile import Tile
from questboard.utils.naming import IdSequence
from questboard.utils.rng import GameRNG


class ScriptedRNG(GameRNG):
    """GameRNG whose die rolls and uniform draws can be queued up front.

    Queued values are consumed in order; once a queue is empty the seeded
    generator takes over.
    """

    def __init__(self, rolls=(), randoms=(), seed: int = 42):
        super().__init__(seed)
        self.rolls = list(rolls)
        self.randoms = list(randoms)

    def roll(self, sides: int) -> int:
        if self.rolls:
            value = self.rolls.pop(0)
            assert 1 <= value <= sides, f"queued roll {value} does not fit a d{sides}"
            return value
        return super().roll(sides)

    def random(self) -> float:
        if self.randoms:
            return self.randoms.pop(0)
        return super().random()


def make_item(
    item_id: str = "item-w1",
    category: str = "weapon",
    stats: int = 10,
    icon: str | None = "sword",
    name: str = "Test Blade",
    rarity: str = "common",
    effect: str | None = None,
) -> Item:
    return Item(
        id=item_id,
        name=name,
        category=category,
        rarity=rarity,
        stats=stats,
        value=10,
        effect=effect,
        icon=icon,
    )


def make_potion(item_id: str = "item-p1", stats: int = 25) -> Item:
    return make_item(item_id, category="potion", stats=stats, icon="potion", name="Health Potion", effect="healing")


def make_trap_item(item_id: str = "item-t1", effect: str = "damage", stats: int = 15) -> Item:
    return make_item(item_id, category="trap", stats=stats, icon="trap", name="Spike Trap", effect=effect)


def make_enemy(health: int = 30, power: int = 15, gold: int = 30, enemy_id: str = "enemy-test") -> Enemy:
    reward = make_item(f"{enemy_id}-loot", category="armor", stats=12, icon="armor", name="Leather Armor")
    return Enemy(id=enemy_id, name="Goblin Scout", health=health, power=power, reward=reward, gold_reward=gold)


def make_player(player_id: str = "p1", name: str = "Hero", is_ai: bool = False, health: int = 100) -> Player:
    return Player(
        id=player_id,
        name=name,
        is_ai=is_ai,
        base_stats=Stats(attack=10, defense=10, health=100, speed=10),
        health=health,
        max_health=100,
    )


def make_board(kinds: list[str], enemy: Enemy | None = None) -> list[Tile]:
    """Single-row board whose route runs left to right; ``kinds[i]`` is the tile at path index i."""
    tiles = []
    for index, kind in enumerate(kinds):
        tiles.append(
            Tile(
                id=index,
                x=index,
                y=0,
                kind=kind,
                is_path=True,
                path_index=index,
                enemy=(enemy or make_enemy(enemy_id=f"enemy-{index}")) if kind == "battle" else None,
            )
        )
    return tiles


def arm_trap(tile: Tile, kind: str = "damage", power: int = 15, owner: str = "p2") -> Trap:
    trap = Trap(id=f"trap-{tile.id}", kind=kind, power=power, owner_id=owner, owner_name=owner.upper())
    tile.kind = "trap"
    tile.trap = trap
    return trap


def create_engine(
    kinds: list[str] | None = None,
    players: list[Player] | None = None,
    rng: GameRNG | None = None,
    ledger=None,
    enemy: Enemy | None = None,
) -> tuple[TurnEngine, ManualScheduler]:
    """Engine over a hand-made board, driven by a manual scheduler.

    Defaults to a ten-tile plain route and two human players.
    """
    kinds = kinds or ["start"] + ["normal"] * 8 + ["castle"]
    players = players or [make_player("p1"), make_player("p2", name="Sidekick")]
    state = GameState(players=players, board=make_board(kinds, enemy), current_player_id=players[0].id)
    scheduler = ManualScheduler()
    engine = TurnEngine(
        state=state,
        rng=rng or ScriptedRNG(),
        ids=IdSequence(),
        scheduler=scheduler,
        session_id="game-test",
        ledger=ledger if ledger is not None else InMemoryRewardsLedger(),
    )
    return engine, scheduler
