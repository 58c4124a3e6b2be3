# Standard Library Imports
from pathlib import Path

PHYSICS_DATA_DIR = Path(__file__).parents[2] / "src" / "dyntime" / "physics" / "data"
TIMESCALE_DATA_DIR = PHYSICS_DATA_DIR / "timescales"
