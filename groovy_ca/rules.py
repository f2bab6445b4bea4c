"""Rule families and their lookup tables.

Three families are supported:

- ``StandardRule``: Wolfram elementary rule numbers 0-255.
- ``AwareRule``: 16-entry rules 0-65535 whose neighborhood also carries a
  "changed last step" bit.
- ``LifeRule``: 2D outer-totalistic rules in Birth/Survival notation.

Table entry ``i`` of a 1D rule is bit ``i`` of the rule number (LSB first),
where ``i = 4*left + 2*center + right`` for standard rules and
``i = 8*left + 4*center + 2*right + changed`` for aware rules. This is the
numbering used in the literature (rule 110, rule 30, ...).
"""

import re
import numpy as np
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Dict, FrozenSet, Iterable, Tuple, Union

from .errors import InvalidRule


STANDARD_TABLE_SIZE = 8
AWARE_TABLE_SIZE = 16
MAX_NEIGHBORS = 8  # Moore neighborhood


class MemoryBehavior(Enum):
    """How a standard rule reacts to a cell that changed on the previous step."""
    IGNORE = "ignore"        # same output as without memory
    STABILIZE = "stabilize"  # cell keeps its current value
    INVERT = "invert"        # opposite of the base output
    EXCITE = "excite"        # cell is forced on


_CHANGED_OUTPUT = {
    MemoryBehavior.IGNORE: lambda out, center: out,
    MemoryBehavior.STABILIZE: lambda out, center: center,
    MemoryBehavior.INVERT: lambda out, center: 1 - out,
    MemoryBehavior.EXCITE: lambda out, center: 1,
}


def _check_rule_number(number, table_size: int, family: str) -> int:
    if isinstance(number, bool) or not isinstance(number, (int, np.integer)):
        raise InvalidRule(f"{family} rule number must be an integer, got {number!r}")
    limit = (1 << table_size) - 1
    if not 0 <= number <= limit:
        raise InvalidRule(f"{family} rule number must be in [0, {limit}], got {number}")
    return int(number)


def _decode(number: int, table_size: int) -> np.ndarray:
    table = np.array([(number >> i) & 1 for i in range(table_size)], dtype=np.uint8)
    table.flags.writeable = False
    return table


def decode_standard_rule(number: int) -> np.ndarray:
    """Return the 8-entry lookup table of an elementary rule number."""
    return _decode(_check_rule_number(number, STANDARD_TABLE_SIZE, "standard"), STANDARD_TABLE_SIZE)


def decode_aware_rule(number: int) -> np.ndarray:
    """Return the 16-entry lookup table of an aware rule number."""
    return _decode(_check_rule_number(number, AWARE_TABLE_SIZE, "aware"), AWARE_TABLE_SIZE)


def encode_table(table: Iterable[int]) -> int:
    """Inverse of the decoders: pack a 0/1 table back into its rule number."""
    return sum(int(bit) << i for i, bit in enumerate(table))


def rule_table_dict(table: np.ndarray) -> Dict[str, int]:
    """Render a lookup table keyed by neighborhood bit pattern, e.g. ``"110"``."""
    width = (len(table) - 1).bit_length()
    return {format(i, f"0{width}b"): int(out) for i, out in enumerate(table)}


def lift_to_aware(base: int, behavior: Union[MemoryBehavior, str]) -> int:
    """Derive an aware rule number from an elementary rule and a memory behavior.

    Entries with the changed bit clear reproduce the base rule. Entries with
    the changed bit set are derived from the base output and the center cell
    according to ``behavior``.
    """
    table = decode_standard_rule(base)
    try:
        behavior = MemoryBehavior(behavior)
    except ValueError as err:
        raise InvalidRule(f"unknown memory behavior {behavior!r}") from err

    changed_output = _CHANGED_OUTPUT[behavior]
    number = 0
    for pattern in range(STANDARD_TABLE_SIZE):
        out = int(table[pattern])
        center = (pattern >> 1) & 1
        number |= out << (2 * pattern)
        number |= changed_output(out, center) << (2 * pattern + 1)
    return number


def decode_life_rule(birth: Iterable[int], survival: Iterable[int]) -> Tuple[FrozenSet[int], FrozenSet[int]]:
    """Validate birth/survival neighbor counts; duplicates collapse."""
    return _count_set(birth, "birth"), _count_set(survival, "survival")


def _count_set(counts: Iterable[int], name: str) -> FrozenSet[int]:
    result = set()
    for n in counts:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise InvalidRule(f"{name} counts must be integers, got {n!r}")
        if not 0 <= n <= MAX_NEIGHBORS:
            raise InvalidRule(f"{name} counts must be in [0, {MAX_NEIGHBORS}], got {n}")
        result.add(int(n))
    return frozenset(result)


@dataclass(frozen=True)
class StandardRule:
    """Elementary (3-cell neighborhood) rule."""
    number: int

    def __post_init__(self):
        object.__setattr__(self, "number", _check_rule_number(self.number, STANDARD_TABLE_SIZE, "standard"))

    @cached_property
    def table(self) -> np.ndarray:
        return decode_standard_rule(self.number)

    def lambda_parameter(self) -> float:
        """Fraction of neighborhoods mapping to 1."""
        return float(self.table.mean())

    def to_string(self) -> str:
        return f"Rule {self.number}"


@dataclass(frozen=True)
class AwareRule:
    """Elementary rule extended with the cell's "changed last step" bit."""
    number: int

    def __post_init__(self):
        object.__setattr__(self, "number", _check_rule_number(self.number, AWARE_TABLE_SIZE, "aware"))

    @classmethod
    def from_standard(cls, base: int, behavior: Union[MemoryBehavior, str]) -> "AwareRule":
        return cls(lift_to_aware(base, behavior))

    @cached_property
    def table(self) -> np.ndarray:
        return decode_aware_rule(self.number)

    def lambda_parameter(self) -> float:
        return float(self.table.mean())

    def to_string(self) -> str:
        return f"Aware {self.number}"


@dataclass(frozen=True)
class LifeRule:
    """Outer-totalistic rule in Birth/Survival notation (e.g., B3/S23 for Game of Life)."""
    birth: FrozenSet[int]
    survival: FrozenSet[int]

    def __post_init__(self):
        birth, survival = decode_life_rule(self.birth, self.survival)
        object.__setattr__(self, "birth", birth)
        object.__setattr__(self, "survival", survival)

    @classmethod
    def from_string(cls, rule_str: str) -> "LifeRule":
        """Parse rule from string like 'B3/S23', 'B3S23', 'B2/S', 'B3/' or 'S23/B3'."""
        text = rule_str.upper().replace(" ", "")
        match = re.fullmatch(r"B(?P<birth>\d*)(?:/?S(?P<survival>\d*))?/?", text)
        if match is None:
            # Survival part first, as in 'S23/B3'
            match = re.fullmatch(r"S(?P<survival>\d*)/B(?P<birth>\d*)", text)
        if match is None:
            raise InvalidRule(f"not a B/S rule string: {rule_str!r}")
        birth = [int(c) for c in match.group("birth")]
        survival = [int(c) for c in (match.group("survival") or "")]
        return cls(birth=birth, survival=survival)

    @classmethod
    def from_bits(cls, birth_bits: int, survival_bits: int) -> "LifeRule":
        """Create rule from bit representations (0-511 each, 9 bits for counts 0-8)."""
        for bits in (birth_bits, survival_bits):
            if not 0 <= bits < 1 << (MAX_NEIGHBORS + 1):
                raise InvalidRule(f"count mask must be in [0, 511], got {bits}")
        birth = {i for i in range(MAX_NEIGHBORS + 1) if birth_bits & (1 << i)}
        survival = {i for i in range(MAX_NEIGHBORS + 1) if survival_bits & (1 << i)}
        return cls(birth=birth, survival=survival)

    def to_string(self) -> str:
        """Convert to standard notation like 'B3/S23'."""
        b_str = "".join(str(i) for i in sorted(self.birth))
        s_str = "".join(str(i) for i in sorted(self.survival))
        return f"B{b_str}/S{s_str}"

    def to_bits(self) -> Tuple[int, int]:
        birth_bits = sum(1 << i for i in self.birth)
        survival_bits = sum(1 << i for i in self.survival)
        return birth_bits, survival_bits

    def lambda_parameter(self) -> float:
        """Langton's lambda: transitions to alive over all 18 (state, count) pairs."""
        return (len(self.birth) + len(self.survival)) / (2.0 * (MAX_NEIGHBORS + 1))


Rule = Union[StandardRule, AwareRule, LifeRule]


def parse_rule(text: str) -> Rule:
    """Parse a rule given on the command line.

    ``"110"`` is an elementary rule, ``"aware:1234"`` an aware rule and
    anything starting with ``B`` a Life-like rule.
    """
    text = text.strip()
    if text.lower().startswith("aware:"):
        return AwareRule(_parse_int(text[len("aware:"):]))
    if text.upper().startswith("B"):
        return LifeRule.from_string(text)
    return StandardRule(_parse_int(text))


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError as err:
        raise InvalidRule(f"rule number must be an integer, got {text!r}") from err


# Elementary rules grouped by Wolfram class
CLASS_IV_RULES = (110, 124, 137, 193, 54, 147)
CLASS_III_RULES = (30, 45, 60, 90)
TRIVIAL_RULES = (0, 4, 32, 51)

GAME_OF_LIFE = LifeRule.from_string("B3/S23")
HIGHLIFE = LifeRule.from_string("B36/S23")
DAY_AND_NIGHT = LifeRule.from_string("B3678/S34678")
