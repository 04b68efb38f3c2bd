import threading
import uuid
from functools import lru_cache
from typing import Any, Iterator

from ..models import (
    ExhaustionStrategy,
    GeneratorInfo,
    GeneratorParamsInfo,
    GeneratorState,
)
from . import lcg
from .code_generator import CodeGenerator
from .errors import ExhaustedError


class ManagedGenerator:
    _id: uuid.UUID
    _generator: CodeGenerator[Any]
    _lock: threading.Lock

    def __init__(self, generator: CodeGenerator[Any]) -> None:
        self._id = uuid.uuid4()
        self._generator = generator
        self._lock = threading.Lock()

    @property
    def generator_id(self) -> uuid.UUID:
        return self._id

    def issue(self, count: int) -> list[str]:
        """
        Raises `ExhaustedError` or `TypeError`.
        """
        codes: list[str] = []
        with self._lock:
            gen = self._generator
            if gen.strategy is ExhaustionStrategy.PANIC and gen.remaining < count:
                # all or nothing, a failed request doesn't burn codes
                raise ExhaustedError(length=gen.length, modulus=gen.modulus)
            for _ in range(count):
                codes.append(self._generator.next_string())
        return codes

    def snapshot(self) -> GeneratorState:
        with self._lock:
            return self._generator.snapshot()

    def partition(self, count: int) -> list[CodeGenerator[Any]]:
        with self._lock:
            return self._generator.into_partitioned_generators(count)

    def get_info_model(self) -> GeneratorInfo:
        with self._lock:
            gen = self._generator
            return GeneratorInfo(
                generator_id=self._id,
                length=gen.length,
                alphabet_size=len(gen.alphabet),
                modulus=gen.modulus,
                steps_taken=gen.steps_taken,
                remaining=gen.remaining,
                exhaustion_strategy=gen.strategy,
                partition=gen.partition,
            )

    def get_params_model(self) -> GeneratorParamsInfo:
        with self._lock:
            params = self._generator.params
            return GeneratorParamsInfo(
                generator_id=self._id,
                params=params,
                offset=self._generator.offset,
                full_period=lcg.is_full_period(params),
            )


class GeneratorManager:
    _generators_by_id: dict[uuid.UUID, ManagedGenerator]
    _lock: threading.Lock

    def __init__(self) -> None:
        self._generators_by_id = {}
        self._lock = threading.Lock()

    def iter_generators(self) -> Iterator[ManagedGenerator]:
        with self._lock:
            return iter(list(self._generators_by_id.values()))

    def get_generator(self, generator_id: uuid.UUID) -> ManagedGenerator | None:
        return self._generators_by_id.get(generator_id)

    def add_generator(self, generator: CodeGenerator[Any]) -> ManagedGenerator:
        managed = ManagedGenerator(generator)
        with self._lock:
            self._generators_by_id[managed.generator_id] = managed
        return managed

    def remove_generator(self, generator_id: uuid.UUID) -> bool:
        with self._lock:
            return self._generators_by_id.pop(generator_id, None) is not None

    def partition_generator(
        self, managed: ManagedGenerator, count: int
    ) -> list[ManagedGenerator]:
        """
        Raises `RepartitionError` or `ValueError`.
        """
        partitions = managed.partition(count)
        with self._lock:
            # the partitions take over the original's codes
            self._generators_by_id.pop(managed.generator_id, None)
        return [self.add_generator(part) for part in partitions]


@lru_cache()
def get_generator_manager() -> GeneratorManager:
    return GeneratorManager()
