CONFIG = {
    "ROTATION": "wall_kick",   # "wall_kick" or "simple"
    "BASE_DROP_MS": 1000,
    "DROP_STEP_MS": 100,
    "MIN_DROP_MS": 100,
    "LINES_PER_LEVEL": 10,
    "SEED": None,
}

ROTATION_POLICIES = ("wall_kick", "simple")
