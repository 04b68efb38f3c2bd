import copy
import logging
import secrets
from typing import Any, Generic, Hashable, Iterable, TypeVar

from ..models import (
    U64_MAX,
    AlphabetPreset,
    ExhaustionStrategy,
    GeneratorState,
    LcgParams,
    PartitionDescriptor,
)
from . import lcg
from .alphabet import get_preset_alphabet
from .codec import AlphabetCodec
from .errors import (
    ConfigurationOverflowError,
    ExhaustedError,
    RepartitionError,
    UnserializableAlphabetError,
)
from .partition import partition

_LOGGER = logging.getLogger(__name__)

_SymbolT = TypeVar("_SymbolT", bound=Hashable)

# exact types, subclasses like str enums come back from JSON as their base type
_SERIALIZABLE_SYMBOL_TYPES = (str, bool, int, float)


def compute_modulus(alphabet_size: int, length: int) -> int:
    modulus = alphabet_size**length
    if modulus > U64_MAX:
        raise ConfigurationOverflowError(alphabet_size=alphabet_size, length=length)
    return modulus


class CodeGenerator(Generic[_SymbolT]):
    """Issues every code of the current length exactly once, in a scrambled order.

    The codes are the base-N expansions of a full-period LCG walk over
    `[0, N^L)`, rotated by a per-length offset. All parameters are derived from
    the seed, so two generators with the same seed, alphabet and length issue
    the same sequence forever.

    Instances aren't thread-safe, guard concurrent access to one generator with
    a lock. Separate generators (including partitions) share no state.
    """

    _codec: AlphabetCodec[_SymbolT]
    _is_textual: bool
    _seed: int
    _length: int
    _params: LcgParams
    _offset: int
    _x: int
    _steps_taken: int
    _strategy: ExhaustionStrategy
    _partition: PartitionDescriptor | None
    _skip_before_next: bool

    def __init__(
        self, alphabet: Iterable[_SymbolT], length: int, *, seed: int | None = None
    ) -> None:
        if length < 1:
            raise ValueError("code length must be at least 1")

        self._codec = AlphabetCodec(alphabet)
        self._is_textual = all(isinstance(s, str) for s in self._codec.alphabet)
        self._seed = secrets.randbits(64) if seed is None else seed
        self._strategy = ExhaustionStrategy.INCREASE_LENGTH
        self._partition = None
        self._skip_before_next = False
        self._configure(length)

    @classmethod
    def with_alphabet(
        cls, alphabet: Iterable[_SymbolT], length: int, *, seed: int | None = None
    ) -> "CodeGenerator[_SymbolT]":
        return cls(alphabet, length, seed=seed)

    @classmethod
    def from_preset(
        cls, preset: AlphabetPreset, length: int, *, seed: int | None = None
    ) -> "CodeGenerator[str]":
        return cls(get_preset_alphabet(preset), length, seed=seed)  # type: ignore

    @classmethod
    def numeric(cls, length: int, *, seed: int | None = None) -> "CodeGenerator[str]":
        return cls.from_preset(AlphabetPreset.NUMERIC, length, seed=seed)

    @classmethod
    def lowercase_alphanumeric(
        cls, length: int, *, seed: int | None = None
    ) -> "CodeGenerator[str]":
        return cls.from_preset(AlphabetPreset.LOWERCASE_ALPHANUMERIC, length, seed=seed)

    @classmethod
    def alphanumeric(
        cls, length: int, *, seed: int | None = None
    ) -> "CodeGenerator[str]":
        return cls.from_preset(AlphabetPreset.ALPHANUMERIC, length, seed=seed)

    @classmethod
    def uppercase(cls, length: int, *, seed: int | None = None) -> "CodeGenerator[str]":
        return cls.from_preset(AlphabetPreset.UPPERCASE, length, seed=seed)

    @classmethod
    def restore(cls, state: GeneratorState) -> "CodeGenerator[Any]":
        if not lcg.is_full_period(state.params):
            raise ValueError("LCG parameters don't have a full period")

        generator = cls(state.alphabet, state.length, seed=state.seed)
        generator._params = state.params
        generator._offset = state.offset
        generator._x = state.x
        generator._steps_taken = state.steps_taken
        generator._strategy = state.exhaustion_strategy
        generator._partition = state.partition
        generator._skip_before_next = state.skip_before_next
        return generator

    def snapshot(self) -> GeneratorState:
        for symbol in self._codec.alphabet:
            if type(symbol) not in _SERIALIZABLE_SYMBOL_TYPES:
                raise UnserializableAlphabetError(symbol=symbol)

        return GeneratorState(
            alphabet=list(self._codec.alphabet),
            length=self._length,
            seed=self._seed,
            params=self._params,
            offset=self._offset,
            x=self._x,
            steps_taken=self._steps_taken,
            exhaustion_strategy=self._strategy,
            partition=self._partition,
            skip_before_next=self._skip_before_next,
        )

    def clone(self) -> "CodeGenerator[_SymbolT]":
        return copy.deepcopy(self)

    @property
    def alphabet(self) -> tuple[_SymbolT, ...]:
        return self._codec.alphabet

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def length(self) -> int:
        return self._length

    @property
    def modulus(self) -> int:
        return self._params.modulus

    @property
    def params(self) -> LcgParams:
        return self._params

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def steps_taken(self) -> int:
        return self._steps_taken

    @property
    def strategy(self) -> ExhaustionStrategy:
        return self._strategy

    @property
    def partition(self) -> PartitionDescriptor | None:
        return self._partition

    @property
    def remaining(self) -> int:
        """Codes this generator can still issue before the current cycle ends."""
        left = self.modulus - self._steps_taken
        if self._partition is None:
            return left
        stride = self._partition.stride
        if self._skip_before_next:
            return left // stride
        if left == 0:
            return 0
        return 1 + (left - 1) // stride

    def exhaustion_strategy(
        self, strategy: ExhaustionStrategy
    ) -> "CodeGenerator[_SymbolT]":
        self._strategy = ExhaustionStrategy(strategy)
        return self

    def assign_partition(self, descriptor: PartitionDescriptor) -> None:
        if self._partition is not None:
            raise RepartitionError(stride=self._partition.stride)
        self._partition = descriptor
        self._skip_before_next = False

    def into_partitioned_generators(
        self, count: int
    ) -> list["CodeGenerator[_SymbolT]"]:
        return partition(self, count)

    def _configure(self, length: int) -> None:
        modulus = compute_modulus(self._codec.base, length)
        rng = lcg.rng_for(self._seed, length)
        self._params = lcg.configure(modulus, rng=rng)
        self._offset = rng.randrange(modulus)
        self._length = length
        self._x = 0
        self._steps_taken = 0

    def _restart_cycle(self) -> None:
        match self._strategy:
            case ExhaustionStrategy.INCREASE_LENGTH:
                self._configure(self._length + 1)
                _LOGGER.debug("increased code length to %s", self._length)
            case ExhaustionStrategy.CYCLE:
                self._x = 0
                self._steps_taken = 0
                _LOGGER.debug("restarting the cycle of %s codes", self.modulus)
            case ExhaustionStrategy.PANIC:
                raise ExhaustedError(length=self._length, modulus=self.modulus)
            case _:
                raise NotImplementedError

    def _walk(self, steps: int) -> None:
        # jumps straight to the end of each cycle, so this is O(log steps) per cycle
        while steps:
            if self._steps_taken == self.modulus:
                self._restart_cycle()
            chunk = min(steps, self.modulus - self._steps_taken)
            self._x = lcg.step(lcg.jump(self._params, chunk), self._x)
            self._steps_taken += chunk
            steps -= chunk

    def advance(self, steps: int) -> None:
        """Move the permutation forward by `steps` without issuing codes.

        A panicking generator stops at the end of its cycle instead of raising.
        """
        if self._strategy is ExhaustionStrategy.PANIC:
            steps = min(steps, self.modulus - self._steps_taken)
        self._walk(steps)

    def next_int(self) -> int:
        """Index of the next code in `[0, modulus)`.

        All `next*` methods advance the generator in the same way.
        """
        steps = 1
        if self._partition is not None and self._skip_before_next:
            steps = self._partition.stride

        if (
            self._strategy is ExhaustionStrategy.PANIC
            and self._steps_taken + steps > self.modulus
        ):
            _LOGGER.warning(
                "all %s codes of length %s have been issued", self.modulus, self._length
            )
            raise ExhaustedError(length=self._length, modulus=self.modulus)

        self._walk(steps)
        if self._partition is not None:
            self._skip_before_next = True

        return (self._x + self._offset) % self.modulus

    def next(self) -> list[_SymbolT]:
        index = self.next_int()
        return self._codec.encode(index, self._length)

    def next_string(self) -> str:
        if not self._is_textual:
            raise TypeError("next_string() needs an alphabet of characters")
        return "".join(self.next())  # type: ignore

    def decode(self, code: Iterable[_SymbolT]) -> int:
        return self._codec.decode(code)


__all__ = [
    "compute_modulus",
    CodeGenerator.__name__,
]
