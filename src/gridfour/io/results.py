from __future__ import annotations

import csv
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Iterable

from gridfour.game.tournament import GameRecord

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [f.name for f in fields(GameRecord)]


def write_results_csv(path: str | Path, records: Iterable[GameRecord]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    n = 0
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=RESULT_COLUMNS)
        w.writeheader()
        for rec in records:
            w.writerow(asdict(rec))
            n += 1
    logger.info("Wrote %d game rows to %s", n, p)
    return p
