from typing import Iterator

from lcg_seeker.models.generator_config import GeneratorConfig

U64_MASK = (1 << 64) - 1
I64_SIGN = 1 << 63


def to_i64(value: int) -> int:
    """Reinterpret the low 64 bits of value as a two's complement signed integer."""
    value &= U64_MASK
    return value - (1 << 64) if value & I64_SIGN else value


def trunc_mod(value: int, modulus: int) -> int:
    """Remainder whose sign follows the dividend, like C and Rust integer `%`."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


class Lcg:
    """
    Linear congruential generator over a signed 64-bit accumulator.

    The same instance is reseeded for every trial; iterating it never stops.
    """

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.state = 0
        self._modulus = config.modulus
        self._multiplier = config.multiplier
        self._increment = config.increment
        self._lsb = config.lsb
        self._bitmask = config.bitmask

    def seed(self, value: int, warmup: int = 0) -> None:
        """Reset the accumulator and discard the first `warmup` outputs."""
        self.state = to_i64(value)
        for _ in range(warmup):
            self.rand()

    def rand(self) -> int:
        s = self.state
        if self._modulus == 0:
            s = to_i64(s * self._multiplier)
            s = to_i64(s + self._increment)
        else:
            # Reduce after the multiply and again after the add.
            s = trunc_mod(to_i64(s * self._multiplier), self._modulus)
            s = trunc_mod(to_i64(s + self._increment), self._modulus)
        self.state = s
        return (s >> self._lsb) & self._bitmask

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.rand()
