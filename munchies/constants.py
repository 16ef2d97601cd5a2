"""Gameplay and tuning constants.

Centralizes numeric tuning values so the session, effects and entities
never carry magic numbers of their own.
"""

# Spawning
MAX_OBSTACLES = 6  # food is only added while fewer than this are on screen
WEED_FRAME_INTERVAL = 600  # every Nth frame attempts a weed instead of food
SPAWN_Y = -200  # obstacles start above the visible field
SPAWN_SPACING_FACTOR = 3  # minimum spawn distance in player widths
MUNCH_LIMIT = 5  # obstacles munched more than this are removed
OBSTACLE_MARGIN = 200  # how far past the screen edge obstacles may travel
OBSTACLE_FAR_BOUND = 2000  # minimum right/bottom clamp for obstacles

# Movement
FRAME_SCALE_FACTOR = 0.01  # scale = screen.scale * rate * this
OBSTACLE_SWAY_PERIOD = 60  # dx = cos(frame / period) / divisor
OBSTACLE_SWAY_DIVISOR = 6
PLAYER_BOUNCE_PERIOD = 5  # dy = cos(frame / period) / divisor
PLAYER_BOUNCE_DIVISOR = 30
PLAYER_GROWTH = 1  # width/height gained per food eaten

# Throttling (milliseconds)
BLAST_WAVE_THROTTLE_MS = 600
BURST_THROTTLE_MS = 300
PLAYBACK_THROTTLE_MS = 300

# Effects
BURST_DEFAULT_SHARDS = 10
BURST_DEFAULT_VELOCITY = (-10, 10)
BURST_VX_RANGE = (-5, 5)  # velocity ranges used by gameplay bursts
BURST_VY_RANGE = (-10, 1)
SHARD_RADIUS_RANGE = (5, 20)
SHARD_MIN_RADIUS = 1  # shards smaller than this are removed
SHARD_SPIN = 0.1  # radians added per tick, times the shard's direction
FOOD_BURST_SHARDS = 1
FOOD_BURST_BURN_RATE = 0.025
WEED_BURST_SHARDS = 20
WEED_BURST_BURN_RATE = 0.01
GAME_OVER_BURST_SHARDS = 200
GAME_OVER_BURST_BURN_RATE = 0.01

BLAST_WAVE_START_RADIUS = 25
BLAST_WAVE_DEFAULT_WIDTH = 50
BLAST_WAVE_DEFAULT_BURN_RATE = 100  # percent; divided by 100 at construction
BLAST_WAVE_WEED_BURN_RATE = (50, 100)
BLAST_WAVE_MIN_WIDTH = 1  # rings thinner than this are removed
BLAST_WAVE_GROWTH = 8  # radius gained per tick, times burn rate
BLAST_WAVE_FADE = 0.0075  # alpha lost per tick, times burn rate

# Timers
GAME_OVER_REPORT_DELAY_MS = 1000  # delay before the final score is reported
TAP_GRACE_FRAMES = 60  # touch input is ignored for the first frames

__all__ = [name for name in globals().keys() if name.isupper()]
