# --- Display ---
WIDTH = 288
HEIGHT = 512
FPS = 60
MAX_DT = 1.0 / 30.0          # clamp stalls in the continuous clock (sec)

# --- Timestep ---
TIMESTEP_MODE = "continuous"  # "continuous" | "discrete"

# --- Bird ---
PLAYER_W = 34
PLAYER_H = 24
PLAYER_X = WIDTH / 2 - PLAYER_W / 2
PLAYER_Y = HEIGHT / 2 - PLAYER_H / 2
GRAVITY = 600.0              # px/s^2, positive = down
JUMP_VELOCITY = -200.0       # px/s, upward impulse
JUMP_ROTATION = -25.0        # degrees, nose-up on jump
ROTATION_ACCEL = 240.0       # deg/s^2
MAX_ROTATION = 90.0          # nose straight down

# --- Bird animation ---
ANIM_FRAMES = ("upflap", "midflap", "downflap")
ANIM_SPEED = 9.0             # frames per second
ANIM_PING_PONG = True

# --- Pipes ---
PIPE_W = 52
PIPE_H = 320
PIPE_VELOCITY = 70.0         # px/s leftwards
PIPE_SPACING = 100           # vertical gap height (px)
PIPE_BOUNDS = 200            # min distance of the gap center from either edge
POOL_SIZE = 3

# --- Background ---
BG_VELOCITY = 10.0           # px/s leftwards

SEED_DEFAULT = None          # None -> random layout each launch

# --- Env / observations ---
OOB_MARGIN = 80              # px beyond the playfield before the env ends the run
OBS_MAX_VY = 600.0           # vy normaliser
OBS_PIPES_AHEAD = 2

# --- Colors (RGB) ---
COLOR_SKY = (78, 192, 202)
COLOR_SKY_BAND = (96, 206, 214)
COLOR_PIPE = (84, 180, 50)
COLOR_PIPE_EDGE = (40, 96, 28)
COLOR_BIRD = (250, 200, 40)
COLOR_WING = {"upflap": (255, 240, 160), "midflap": (240, 220, 120), "downflap": (220, 170, 40)}
COLOR_FG = (250, 250, 250)
COLOR_DANGER = (230, 70, 70)


def check_pipe_config(height: float = HEIGHT,
                      bounds: float = PIPE_BOUNDS,
                      spacing: float = PIPE_SPACING,
                      pool_size: int = POOL_SIZE) -> None:
    """Raise ValueError if the pipe layout can never produce a reachable gap."""
    if 2 * bounds >= height:
        raise ValueError(f"PIPE_BOUNDS={bounds} leaves no gap range in a playfield of height {height}")
    if not 0 < spacing < height:
        raise ValueError(f"PIPE_SPACING={spacing} must be in (0, {height})")
    if pool_size != 3:
        raise ValueError(f"pipe pool size is fixed at 3, got {pool_size}")
