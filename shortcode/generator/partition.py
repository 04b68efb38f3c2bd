import logging
from typing import TYPE_CHECKING, Hashable, TypeVar

from ..models import PartitionDescriptor
from .errors import RepartitionError

if TYPE_CHECKING:
    from .code_generator import CodeGenerator

_LOGGER = logging.getLogger(__name__)

_SymbolT = TypeVar("_SymbolT", bound=Hashable)


def partition(
    generator: "CodeGenerator[_SymbolT]", count: int
) -> list["CodeGenerator[_SymbolT]"]:
    """Split a generator into `count` generators that never issue the same code.

    Partition `k` issues the codes the original would have issued at positions
    `k, k + count, k + 2 * count, ...`, so together they issue exactly the
    original sequence. The given generator is left untouched and must not be
    used afterwards. Partitions can't be partitioned again.
    """
    if count < 1:
        raise ValueError("partition count must be at least 1")
    if (existing := generator.partition) is not None:
        raise RepartitionError(stride=existing.stride)

    partitions: list["CodeGenerator[_SymbolT]"] = []
    cursor = generator.clone()
    for offset in range(count):
        if offset:
            cursor.advance(1)
        part = cursor.clone()
        part.assign_partition(PartitionDescriptor(offset=offset, stride=count))
        partitions.append(part)

    _LOGGER.debug(
        "split generator with %s codes left into %s partitions",
        generator.remaining,
        count,
    )
    return partitions


__all__ = ["partition"]
