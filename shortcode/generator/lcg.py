"""Full-period linear congruential permutations of `[0, m)`.

The recurrence `x' = (a * x + c) mod m` visits every residue exactly once per
period iff (Hull-Dobell):

1. `c` and `m` are coprime,
2. `a - 1` is divisible by every prime factor of `m`,
3. `a - 1` is divisible by 4 if `m` is.

Parameters are picked with `configure`: `r` is the product of the distinct
prime factors of `m` (doubled if `4 | m`), `a = 1 + k * r` for a random
`k in [1, m / r)` and `c` is drawn from `[1, m)` until it's coprime to `m`.
"""

import math
from functools import lru_cache
from random import Random

from ..models import LcgParams


def rng_for(seed: int, length: int) -> Random:
    """Random source used to derive the parameters for codes of `length`.

    String seeds are hashed with sha512, so the result doesn't depend on the
    platform or on `PYTHONHASHSEED`.
    """
    return Random(f"{seed}:{length}")


def prime_factors(n: int) -> list[int]:
    """Distinct prime factors of `n` in ascending order."""
    if n < 1:
        raise ValueError(f"can't factor {n}")

    factors: list[int] = []
    p = 2
    while p * p <= n:
        if n % p == 0:
            factors.append(p)
            while n % p == 0:
                n //= p
        p += 1 if p == 2 else 2

    if n > 1:
        factors.append(n)
    return factors


def _multiplier_base(modulus: int) -> int:
    base = math.prod(prime_factors(modulus))
    if modulus % 4 == 0 and base % 4 != 0:
        base *= 2
    return base


def _pick_increment(modulus: int, rng: Random) -> int:
    while True:
        increment = rng.randrange(1, modulus)
        if math.gcd(increment, modulus) == 1:
            return increment


def configure(modulus: int, *, rng: Random) -> LcgParams:
    if modulus == 1:
        return LcgParams(multiplier=1, increment=0, modulus=1)

    base = _multiplier_base(modulus)
    # base divides the modulus, so there are exactly `modulus // base` valid multipliers
    choices = modulus // base
    k = rng.randrange(1, choices) if choices > 1 else 0

    return LcgParams(
        multiplier=1 + k * base,
        increment=_pick_increment(modulus, rng),
        modulus=modulus,
    )


def is_full_period(params: LcgParams) -> bool:
    modulus = params.modulus
    if math.gcd(params.increment, modulus) != 1:
        return False

    a_minus_one = params.multiplier - 1
    if any(a_minus_one % p for p in prime_factors(modulus)):
        return False
    if modulus % 4 == 0 and a_minus_one % 4 != 0:
        return False
    return True


def step(params: LcgParams, x: int) -> int:
    # python integers don't overflow, `a * x` is exact before it's reduced
    return (params.multiplier * x + params.increment) % params.modulus


@lru_cache(maxsize=256)
def jump(params: LcgParams, steps: int) -> LcgParams:
    """Parameters whose single `step` equals `steps` steps of `params`.

    `steps` applications of `x -> a*x + c` are `x -> a^n * x + c * (a^(n-1) + ... + 1)`,
    computed by squaring in O(log steps).
    """
    if steps < 0:
        raise ValueError("can't jump backwards")

    modulus = params.modulus
    acc_a, acc_c = 1 % modulus, 0
    cur_a, cur_c = params.multiplier, params.increment
    while steps:
        if steps & 1:
            acc_a, acc_c = (cur_a * acc_a) % modulus, (cur_a * acc_c + cur_c) % modulus
        cur_a, cur_c = (cur_a * cur_a) % modulus, (cur_a * cur_c + cur_c) % modulus
        steps >>= 1

    return LcgParams(multiplier=acc_a, increment=acc_c, modulus=modulus)


__all__ = [
    "rng_for",
    "prime_factors",
    "configure",
    "is_full_period",
    "step",
    "jump",
]
