"""Synthetic play-by-play frames for the test-suite."""
from pathlib import Path

import numpy as np
import pandas as pd

PLAY_COLUMNS = [
    "game_id",
    "play_type",
    "half_seconds_remaining",
    "down",
    "ydstogo",
    "yardline_100",
    "score_differential",
    "posteam_timeouts_remaining",
]


def make_plays(seasons=(2013, 2014, 2015, 2016, 2017, 2018),
               plays_per_season: int = 120, seed: int = 0) -> pd.DataFrame:
    """
    Plays whose call follows the game situation closely enough for the tree
    models to learn it: 4th down inside the 35 is a field goal, other 4th
    downs are punts, 8+ yards to go is a pass, the rest alternate run/pass.
    """
    rng = np.random.default_rng(seed)
    frames = []
    for season in seasons:
        n = plays_per_season
        down = rng.integers(1, 5, n)
        ydstogo = rng.integers(1, 21, n)
        yardline = rng.integers(1, 100, n)
        play_type = np.where(
            down == 4,
            np.where(yardline < 35, "field_goal", "punt"),
            np.where(ydstogo >= 8, "pass", np.where(np.arange(n) % 2 == 0, "run", "pass")),
        )
        frames.append(pd.DataFrame({
            # YYYYMMDDNN: one game per 12 plays, all in mid-September
            "game_id": season * 1_000_000 + 91500 + np.arange(n) // 12,
            "play_type": play_type,
            "half_seconds_remaining": rng.integers(0, 1801, n).astype(float),
            "down": down,
            "ydstogo": ydstogo,
            "yardline_100": yardline,
            "score_differential": rng.integers(-21, 22, n),
            "posteam_timeouts_remaining": rng.integers(0, 4, n),
        }))
    return pd.DataFrame(pd.concat(frames, ignore_index=True))[PLAY_COLUMNS]


def write_plays_csv(df: pd.DataFrame, path: Path, *, bom: bool = True) -> Path:
    """Write plays the way the export does: NA for nulls, optional BOM."""
    df.to_csv(path, index=False, na_rep="NA", encoding="utf-8-sig" if bom else "utf-8")
    return path
