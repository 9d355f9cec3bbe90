"""Alea pseudo-random number generator.

Alea (Johannes Baagøe) is a small multiply-with-carry generator whose output is
a uniform float in [0, 1). String seeds are folded into the initial registers
by the Mash hash. Every operation here is carried out on IEEE-754 doubles, so a
given seed produces bit-identical sequences on every platform, including
JavaScript deployments of the same algorithm (integer seeds must be exact
doubles there, below 2**53).

The generator is exposed as pure functions over an immutable ``AleaState``:

    state = seed_state("hi there")
    value, state = next_value(state)

Nothing in this module keeps state between calls.
"""

import math
from dataclasses import dataclass

from .constants import (
    ALEA_MULTIPLIER,
    MASH_INITIAL,
    MASH_MULTIPLIER,
    TWO_POW_32,
    TWO_POW_NEG_32,
)


def _uint32(value: float) -> int:
    """Truncate a non-negative double to an unsigned 32-bit integer."""
    return int(value) & 0xFFFFFFFF


def _code_units(text: str) -> list[int]:
    """Return the UTF-16 code units of text (astral characters become pairs)."""
    encoded = text.encode("utf-16-le")
    return [int.from_bytes(encoded[i : i + 2], "little") for i in range(0, len(encoded), 2)]


def seed_to_text(seed: str | int | float) -> str:
    """Canonical text form of a seed, as fed to the Mash hash.

    Integral numbers print without a fractional part, so ``0``, ``0.0`` and
    ``"0"`` all seed the same sequence. Floats are laid out the way JavaScript
    prints numbers; ints always print in full.

    Args:
        seed: String or numeric seed

    Returns:
        Text to hash

    Raises:
        ValueError: If seed is not a string or a finite number
    """
    if isinstance(seed, bool):
        raise ValueError(f"Invalid seed: {seed!r} (booleans are not seeds)")
    if isinstance(seed, str):
        return seed
    if isinstance(seed, int):
        return str(seed)
    if isinstance(seed, float):
        if not math.isfinite(seed):
            raise ValueError(f"Invalid seed: {seed!r} (must be finite)")
        return _number_text(seed)
    raise ValueError(f"Invalid seed type: {type(seed).__name__} (must be str, int or float)")


def _number_text(value: float) -> str:
    """Shortest round-trip text of a finite float, in ECMAScript Number#toString form.

    Python and JavaScript pick the same shortest digits; only the layout
    differs (``1e-07`` vs ``1e-7``, ``1e+21`` vs ``1e21``).
    """
    if value == 0:
        return "0"
    if value < 0:
        return "-" + _number_text(-value)

    mantissa, _, exponent = repr(value).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    all_digits = int_part + frac_part
    stripped = all_digits.lstrip("0")
    # Decimal point position relative to the first significant digit
    n = len(int_part) + int(exponent or 0) - (len(all_digits) - len(stripped))
    digits = stripped.rstrip("0")
    k = len(digits)

    if k <= n <= 21:
        return digits + "0" * (n - k)
    if 0 < n <= 21:
        return digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return "0." + "0" * -n + digits
    sign = "+" if n - 1 >= 0 else "-"
    head = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{head}e{sign}{abs(n - 1)}"


class Mash:
    """Mash string hash.

    The running value ``n`` carries over between calls, which is how the three
    Alea registers end up different even though they hash the same text.
    """

    def __init__(self):
        self.n = float(MASH_INITIAL)

    def __call__(self, data: str) -> float:
        n = self.n
        for unit in _code_units(data):
            n += unit
            h = MASH_MULTIPLIER * n
            n = float(_uint32(h))
            h -= n
            h *= n
            n = float(_uint32(h))
            h -= n
            n += h * TWO_POW_32
        self.n = n
        return _uint32(n) * TWO_POW_NEG_32


@dataclass(frozen=True)
class AleaState:
    """The four Alea registers.

    Together they determine every future output of the generator.
    """

    c: int
    s0: float
    s1: float
    s2: float

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {"c": self.c, "s0": self.s0, "s1": self.s1, "s2": self.s2}

    @classmethod
    def from_dict(cls, data: dict) -> "AleaState":
        """Reconstruct from ``to_dict`` output.

        Raises:
            ValueError: If a register is missing
        """
        try:
            return cls(
                c=int(data["c"]),
                s0=float(data["s0"]),
                s1=float(data["s1"]),
                s2=float(data["s2"]),
            )
        except KeyError as e:
            raise ValueError(f"Malformed generator state: missing {e}") from e


def seed_state(seed: str | int | float) -> AleaState:
    """Build the initial generator state for a seed.

    Args:
        seed: String or numeric seed (see ``seed_to_text``)

    Returns:
        Initial AleaState
    """
    text = seed_to_text(seed)
    mash = Mash()
    s0 = mash(" ")
    s1 = mash(" ")
    s2 = mash(" ")

    s0 -= mash(text)
    if s0 < 0:
        s0 += 1
    s1 -= mash(text)
    if s1 < 0:
        s1 += 1
    s2 -= mash(text)
    if s2 < 0:
        s2 += 1

    return AleaState(c=1, s0=s0, s1=s1, s2=s2)


def next_value(state: AleaState) -> tuple[float, AleaState]:
    """Advance the generator by one step.

    Args:
        state: Current generator state

    Returns:
        Tuple of (float in [0, 1), successor state)
    """
    t = ALEA_MULTIPLIER * state.s0 + state.c * TWO_POW_NEG_32
    c = math.trunc(t)
    value = t - c
    return value, AleaState(c=c, s0=state.s1, s1=state.s2, s2=value)
