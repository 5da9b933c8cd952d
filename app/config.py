# app/config.py
import os
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parent

# Page templates and static assets
TEMPLATES_DIR = os.getenv("POKEDEX_TEMPLATES_DIR", str(_PACKAGE_DIR / "templates"))
ASSETS_DIR = os.getenv("POKEDEX_ASSETS_DIR", str(_PACKAGE_DIR / "assets"))

# Server
HOST = os.getenv("POKEDEX_HOST", "0.0.0.0")
PORT = int(os.getenv("POKEDEX_PORT", "8080"))
LOG_LEVEL = os.getenv("POKEDEX_LOG_LEVEL", "INFO").upper()
