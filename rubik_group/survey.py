"""Invariant survey over random configurations, configured from YAML."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path

import numpy as np
import yaml
from tqdm import tqdm

from .cube import PRubik
from .invariant import Invariant, invariant
from .moves import scramble
from .pieces import (
    CORNER_REPRESENTATIVES,
    CYCLIC_TABLE,
    EDGE_REPRESENTATIVES,
    FLIP_TABLE,
    N_CORNER_PIECES,
    N_CORNERS,
    N_EDGE_PIECES,
    N_EDGES,
)

SURVEY_MODES = ("precube", "scramble")


def load_config(path: str | Path) -> dict:
    """Load YAML config. An empty file yields an empty dict."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class SurveyConfig:
    samples: int = 1200
    seed: int = 0
    mode: str = "precube"
    scramble_steps: int = 25
    progress: bool = False

    def __post_init__(self):
        if not isinstance(self.samples, int) or self.samples < 1:
            raise ValueError("samples must be >= 1")
        if not isinstance(self.seed, int):
            raise ValueError("seed must be an integer")
        if self.mode not in SURVEY_MODES:
            raise ValueError(f"mode must be one of: {', '.join(SURVEY_MODES)}")
        if not isinstance(self.scramble_steps, int) or self.scramble_steps < 0:
            raise ValueError("scramble_steps must be >= 0")
        if not isinstance(self.progress, bool):
            raise ValueError("progress must be true or false")

    @classmethod
    def from_dict(cls, data: dict) -> "SurveyConfig":
        section = data.get("survey", data)
        if not isinstance(section, dict):
            raise ValueError("survey config must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ValueError(f"Unknown survey config keys: {', '.join(unknown)}")
        return cls(**section)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SurveyConfig":
        return cls.from_dict(load_config(path))


def random_precube(rng: np.random.Generator) -> PRubik:
    """Uniformly random pre-cube: permute the physical pieces, then flip and twist each at random."""
    edges = np.empty(N_EDGE_PIECES, dtype=np.int32)
    edge_targets = rng.permutation(N_EDGES)
    edge_flips = rng.integers(0, 2, size=N_EDGES)
    for k in range(N_EDGES):
        source = int(EDGE_REPRESENTATIVES[k])
        target = int(EDGE_REPRESENTATIVES[edge_targets[k]])
        if edge_flips[k]:
            target = int(FLIP_TABLE[target])
        edges[source] = target
        edges[FLIP_TABLE[source]] = FLIP_TABLE[target]

    corners = np.empty(N_CORNER_PIECES, dtype=np.int32)
    corner_targets = rng.permutation(N_CORNERS)
    corner_twists = rng.integers(0, 3, size=N_CORNERS)
    for k in range(N_CORNERS):
        source = int(CORNER_REPRESENTATIVES[k])
        target = int(CORNER_REPRESENTATIVES[corner_targets[k]])
        for _ in range(int(corner_twists[k])):
            target = int(CYCLIC_TABLE[target])
        for _ in range(3):
            corners[source] = target
            source = int(CYCLIC_TABLE[source])
            target = int(CYCLIC_TABLE[target])

    return PRubik(edges, corners)


@dataclass
class SurveyResult:
    samples: int
    counts: Counter = field(default_factory=Counter)

    @property
    def valid(self) -> int:
        return self.counts[Invariant.identity()]

    @property
    def valid_fraction(self) -> float:
        return self.valid / self.samples if self.samples else 0.0

    def fractions(self) -> dict[Invariant, float]:
        return {value: self.counts[value] / self.samples for value in Invariant.all()}


class InvariantSurvey:
    """Tally the invariant over sampled configurations."""

    def __init__(self, config: SurveyConfig | None = None, verbose: bool = False):
        self.config = config or SurveyConfig()
        self.verbose = verbose
        self._bar: tqdm | None = None

    def _log(self, message: str) -> None:
        if not self.verbose:
            return
        ts = datetime.now().strftime("%H:%M:%S")
        text = f"[{ts}] {message}"
        if self._bar is not None:
            self._bar.write(text)
        else:
            print(text, flush=True)

    def _sample(self, rng: np.random.Generator) -> PRubik:
        if self.config.mode == "scramble":
            cube, _ = scramble(self.config.scramble_steps, rng=rng)
            return cube
        return random_precube(rng)

    def run(self) -> SurveyResult:
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        result = SurveyResult(samples=cfg.samples)

        self._log(f"survey_init mode={cfg.mode} samples={cfg.samples} seed={cfg.seed}")
        self._bar = tqdm(total=cfg.samples, desc="Survey", unit="cube", disable=not cfg.progress)
        try:
            for _ in range(cfg.samples):
                result.counts[invariant(self._sample(rng))] += 1
                self._bar.update(1)
        finally:
            self._bar.close()
            self._bar = None

        self._log(
            f"survey_done valid={result.valid}/{cfg.samples} "
            f"valid_fraction={result.valid_fraction:.4f} classes_seen={len(result.counts)}"
        )
        return result
