"""
Configuration - settings read from the environment
"""
import os
from pathlib import Path

# Catalogue API (optional; without it only cached/CSV catalogues are available)
CATALOGUE_API_URL = os.environ.get("CATALOGUE_API_URL", "").rstrip("/")
CATALOGUE_API_KEY = os.environ.get("CATALOGUE_API_KEY", "")

CACHE_DIR = Path(os.environ.get("CACHE_DIR", "cache"))
CACHE_DIR.mkdir(parents=True, exist_ok=True)

# Width of an availability slot in minutes
SLOT_MINUTES = int(os.environ.get("SLOT_MINUTES", "30"))

# Rooms starting with one of these are online sessions
VIRTUAL_ROOM_PREFIXES = tuple(
    p.strip()
    for p in os.environ.get("VIRTUAL_ROOM_PREFIXES", "GP VIRTOLT,KG VIRTOLT").split(",")
    if p.strip()
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
