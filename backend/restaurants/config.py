from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CSV = Path(__file__).resolve().parent.parent / "data" / "restaurants.csv"


@dataclass(frozen=True)
class StoreConfig:
    """
    Location of the directory snapshot loaded into memory at startup.
    """

    data_path: Path = Path(os.getenv("RESTAURANTS_CSV", str(_DEFAULT_CSV)))


DEFAULT_STORE_CONFIG = StoreConfig()
