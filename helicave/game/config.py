# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 120

# --- World ---
STEP = 2                    # scroll px per tick (also the score unit)

# --- Craft ---
CRAFT_SIZE = 20             # square craft, px
CRAFT_CLIMB = 1             # vertical px per tick, up or down

# --- Level generation ---
SLAB_W = 100                # width of one border slab
GAP_STEP = 10               # gap change per slab
GAP_FLIP_CHANCE = 0.1       # probability the gap trend reverses on a slab
INITIAL_GAP_RATIO = 0.9     # initial (= max) gap as a share of HEIGHT
MIN_GAP_RATIO = 0.5         # min gap as a share of HEIGHT
FLOATING_PER_SCREEN = 2     # free obstacles per viewport width
FLOATING_W = 50
FLOATING_H = 100
SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (9, 14, 28)
COLOR_FG = (220, 232, 255)
COLOR_CRAFT = (204, 204, 204)
COLOR_TRAIL = (238, 238, 238)
COLOR_OBSTACLE = (204, 204, 204)
COLOR_DANGER = (255, 86, 110)

# --- Observation ---
OBS_PROBE_OFFSETS = (40, 120, 240)   # px ahead of the craft's left edge
