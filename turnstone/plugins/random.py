"""Random plugin: reproducible dice, numbers and shuffles for move handlers.

The persisted state is a RandomState ``{seed, prngstate}``. ``prngstate`` stays
None until the first draw and is materialized from ``seed`` on demand, so a
seed picked at game creation is never re-rolled.

Only the authoritative executor advances ``prngstate``. Speculative
executions draw from a throwaway placeholder stream, report that they used
the API, and the reducer discards the whole move. Every player view drops the
plugin data entirely, and an authoritative executor refuses to draw from such
a redacted snapshot.
"""

import logging
import math
import uuid
from dataclasses import dataclass, replace
from typing import Any, Sequence

from ..models.definition import GameDefinition
from ..models.mode import ExecutionMode
from ..utils.alea import AleaState, next_value, seed_state, seed_to_text
from ..utils.constants import (
    DEFAULT_SPOT_VALUE,
    PLACEHOLDER_SEED,
    PREDEFINED_DICE,
    RANDOM_SEED_SENTINEL,
    SEED_SPACE,
)
from .base import Plugin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RandomState:
    """Persisted random plugin state."""

    seed: str | int | float
    prngstate: AleaState | None = None  # None until the first draw

    def to_dict(self) -> dict:
        """Serialize to the persisted layout ``{seed, prngstate}``."""
        return {
            "seed": self.seed,
            "prngstate": self.prngstate.to_dict() if self.prngstate else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RandomState":
        """Reconstruct from ``to_dict`` output."""
        prngstate = data.get("prngstate")
        return cls(
            seed=data["seed"],
            prngstate=AleaState.from_dict(prngstate) if prngstate is not None else None,
        )


def resolve_seed(seed: Any) -> str | int | float:
    """Turn a configured seed into a concrete one.

    None and the "random" sentinel resolve to an unpredictable integer. This
    happens once, at game creation; the result is stored in RandomState.seed.

    Args:
        seed: Configured seed

    Returns:
        Concrete seed

    Raises:
        ValueError: If seed is neither a string, a finite number nor unspecified
    """
    if seed is None or seed == RANDOM_SEED_SENTINEL:
        resolved = uuid.uuid4().int % SEED_SPACE
        logger.debug(f"Resolved unspecified seed to {resolved}")
        return resolved
    seed_to_text(seed)  # Validates type and range
    return seed


def materialize(state: RandomState) -> AleaState:
    """Generator state for a RandomState, seeding it if no draw happened yet."""
    if state.prngstate is not None:
        return state.prngstate
    return seed_state(state.seed)


def draw(state: RandomState) -> tuple[float, RandomState]:
    """Pure draw: one float in [0, 1) and the successor RandomState."""
    value, prngstate = next_value(materialize(state))
    return value, replace(state, prngstate=prngstate)


def _check_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Invalid {name}: {value!r} (must be a positive integer)")


class Random:
    """Request API handed to handlers as ``context.random``.

    One instance lives for a single reducer invocation. It starts from the
    RandomState in the snapshot and accumulates draws; the plugin's ``flush``
    returns the resulting state for the engine to commit.
    """

    def __init__(
        self,
        state: RandomState | None,
        mode: ExecutionMode = ExecutionMode.AUTHORITATIVE,
    ):
        self.mode = mode
        self.original = state
        self.used = False
        self.placeholder = mode is ExecutionMode.SPECULATIVE or state is None
        # Speculative draws never touch the real generator state
        self.state = RandomState(seed=PLACEHOLDER_SEED) if self.placeholder else state

    def random(self) -> float:
        """Draw a float in [0, 1) and advance the generator.

        Raises:
            RuntimeError: If an authoritative executor draws from redacted data
        """
        if self.original is None and self.mode is ExecutionMode.AUTHORITATIVE:
            raise RuntimeError(
                "random plugin state is redacted; an authoritative executor "
                "needs the full snapshot"
            )
        self.used = True
        value, self.state = draw(self.state)
        return value

    def Number(self) -> float:  # noqa: N802
        """Uniform float in [0, 1)."""
        return self.random()

    def Die(  # noqa: N802
        self, spotvalue: int = DEFAULT_SPOT_VALUE, numDice: int = 1  # noqa: N803
    ) -> int | list[int]:
        """Roll dice with ``spotvalue`` faces.

        Args:
            spotvalue: Number of faces
            numDice: Number of dice to roll

        Returns:
            A single value in [1, spotvalue] when numDice is 1, otherwise a
            list of numDice values in draw order

        Raises:
            ValueError: If spotvalue or numDice is not a positive integer
        """
        _check_positive_int("spotvalue", spotvalue)
        _check_positive_int("numDice", numDice)
        rolls = [math.floor(self.random() * spotvalue) + 1 for _ in range(numDice)]
        if numDice == 1:
            return rolls[0]
        return rolls

    def D4(self, numDice: int = 1) -> int | list[int]:  # noqa: N802, N803
        return self.Die(PREDEFINED_DICE["D4"], numDice)

    def D6(self, numDice: int = 1) -> int | list[int]:  # noqa: N802, N803
        return self.Die(PREDEFINED_DICE["D6"], numDice)

    def D8(self, numDice: int = 1) -> int | list[int]:  # noqa: N802, N803
        return self.Die(PREDEFINED_DICE["D8"], numDice)

    def D10(self, numDice: int = 1) -> int | list[int]:  # noqa: N802, N803
        return self.Die(PREDEFINED_DICE["D10"], numDice)

    def D12(self, numDice: int = 1) -> int | list[int]:  # noqa: N802, N803
        return self.Die(PREDEFINED_DICE["D12"], numDice)

    def D20(self, numDice: int = 1) -> int | list[int]:  # noqa: N802, N803
        return self.Die(PREDEFINED_DICE["D20"], numDice)

    def Shuffle(self, sequence: Sequence) -> list:  # noqa: N802
        """Return a uniformly shuffled copy of sequence.

        Fisher-Yates from the last position to the first, one draw per
        position. The input is not modified.
        """
        shuffled = list(sequence)
        for i in range(len(shuffled) - 1, -1, -1):
            j = math.trunc(self.random() * (i + 1))
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def get_state(self) -> RandomState | None:
        """State to persist after this invocation."""
        if self.placeholder:
            return self.original
        return self.state


class RandomPlugin(Plugin):
    """Engine hooks for the random plugin."""

    name = "random"

    def setup(self, game: GameDefinition) -> RandomState:
        seed = resolve_seed(game.seed)
        logger.info(f"Random plugin seeded for game '{game.name}'")
        return RandomState(seed=seed)

    def api(self, data: RandomState | None, mode: ExecutionMode) -> Random:
        return Random(data, mode)

    def flush(self, api: Random) -> RandomState | None:
        return api.get_state()

    def no_client(self, api: Random) -> bool:
        return api.used

    def player_view(self, data: RandomState | None, player_id: str | None) -> None:
        # Generator internals are hidden from every viewer, move author included
        return None
