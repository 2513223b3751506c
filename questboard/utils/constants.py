"""Game configuration constants."""

# Grid dimensions
BOARD_WIDTH = 10
BOARD_HEIGHT = 8

# Path generation
MIN_PATH_LENGTH = 35
MAX_PATH_LENGTH = 45
MAX_PATH_ATTEMPTS = 20  # Fresh walks tried before settling for the longest
BRANCH_COUNT_RANGE = (1, 2)
BRANCH_LENGTH_RANGE = (5, 15)

# Tile distribution for path cells (cumulative thresholds on a [0, 1) draw)
BATTLE_TILE_CHANCE = 0.40
BONUS_TILE_CHANCE = 0.14

# Players
MAX_PLAYERS = 4
STARTING_HEALTH = 100
STARTING_GOLD = 0
BASE_STATS = {"attack": 10, "defense": 10, "health": 100, "speed": 10}
DEFAULT_ENEMY_GOLD = 10

# Combat
ENEMY_INITIATIVE_SPEED = 20  # Enemies roll initiative as if they had speed 20

# Castle completion (rewards ledger)
DEFAULT_ORBS_TO_AWARD = 2

# AI "thinking" delays, in seconds
AI_ROLL_DELAY = 1.5
AI_SELECT_TILE_DELAY = 1.5
AI_COMBAT_DELAY = 2.0
ENEMY_ATTACK_DELAY = 2.0
AI_REWARD_DELAY = 3.0
AI_END_TURN_DELAY = 1.5
AI_CONTINUE_DELAY = 2.0

# Chance an AI keeps playing after a reward/trap instead of ending its turn
AI_CONTINUE_PROBABILITY = 0.7

# AI drinks a potion in battle when health falls below this fraction
AI_POTION_HEALTH_RATIO = 0.3
