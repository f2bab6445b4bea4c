"""
Run configuration for the command line.

Defaults match the interactive explorer: rule 110 on 200 cells for 150 steps,
Game of Life on a 100 x 100 torus.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .patterns import random_grid, random_state, single_cell
from .rules import AwareRule, LifeRule, MemoryBehavior, Rule, StandardRule


MODES = ("1d", "aware", "2d")
INITS = ("random", "single")


@dataclass
class RunConfig:
    """
    Parameters of one run.

    Attributes:
        mode: "1d" (elementary), "aware" or "2d" (Life-like)
        rule: Elementary rule number; for "aware" the base rule to lift
        behavior: Memory behavior used to lift ``rule`` in "aware" mode
        aware_number: Explicit aware rule number, overrides rule/behavior
        birth, survival: Neighbor counts for "2d" mode
        width, height: Cells per row, rows (height is used in "2d" only)
        steps: Number of steps to run
        init: "random" or "single" (center cell; 1D only)
        density: Fraction of live cells for random initialization
        seed: Random seed, None for fresh entropy
    """

    mode: str = "1d"
    rule: int = 110
    behavior: str = "ignore"
    aware_number: Optional[int] = None
    birth: Tuple[int, ...] = (3,)
    survival: Tuple[int, ...] = (2, 3)
    width: int = 200
    height: int = 100
    steps: int = 150
    init: str = "random"
    density: Optional[float] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.birth = tuple(self.birth)
        self.survival = tuple(self.survival)
        self._validate()

    def _validate(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode}")

        if self.init not in INITS:
            raise ValueError(f"init must be one of {INITS}, got {self.init}")

        if self.init == "single" and self.mode == "2d":
            raise ValueError("init 'single' is only available for 1D modes")

        if self.width < 1:
            raise ValueError(f"width must be >= 1, got {self.width}")

        if self.height < 1:
            raise ValueError(f"height must be >= 1, got {self.height}")

        if self.steps < 1:
            raise ValueError(f"steps must be >= 1, got {self.steps}")

        if self.density is not None and not 0 <= self.density <= 1:
            raise ValueError(f"density must be in [0, 1], got {self.density}")

        valid_behaviors = {b.value for b in MemoryBehavior}
        if self.behavior not in valid_behaviors:
            raise ValueError(f"behavior must be one of {sorted(valid_behaviors)}, got {self.behavior}")

    def build_rule(self) -> Rule:
        """Construct the rule for this mode; raises InvalidRule for bad numbers or counts."""
        if self.mode == "2d":
            return LifeRule(self.birth, self.survival)
        if self.mode == "aware":
            if self.aware_number is not None:
                return AwareRule(self.aware_number)
            return AwareRule.from_standard(self.rule, self.behavior)
        return StandardRule(self.rule)

    def build_initial(self) -> np.ndarray:
        """Construct the initial state; the only place randomness is used."""
        rng = np.random.default_rng(self.seed)
        if self.mode == "2d":
            density = 0.3 if self.density is None else self.density
            return random_grid(self.height, self.width, density=density, rng=rng)
        if self.init == "single":
            return single_cell(self.width)
        density = 0.5 if self.density is None else self.density
        return random_state(self.width, density=density, rng=rng)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RunConfig":
        """Create config from dictionary."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        return cls(**{k: v for k, v in d.items() if k in known_fields})

    @classmethod
    def from_args(cls, args: Any, **overrides: Any) -> "RunConfig":
        """Create config from argparse namespace."""
        # Extract only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        config_dict = {k: v for k, v in vars(args).items() if k in known_fields and v is not None}
        config_dict.update(overrides)
        return cls(**config_dict)
