"""
Single place for default game/setup configuration.
Change DEFAULT_SETUP_ID to switch which setup is used when creating a new game (when no setup_id is provided).
"""
import os

# Setup id from data/setups/<id>/setup.json (e.g. "classic", "duel"). This is the default for new games.
DEFAULT_SETUP_ID = "classic"

# Faces on the die rolled by the demo and the /roll endpoint.
DICE_SIDES = 6

# Comma separated list in ALLEYCATS_CORS_ORIGINS overrides the dev defaults.
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "ALLEYCATS_CORS_ORIGINS",
        "http://localhost:5000,http://localhost:5173,http://localhost:3000",
    ).split(",")
    if o.strip()
]
