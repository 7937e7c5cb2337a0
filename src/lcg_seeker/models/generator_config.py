from dataclasses import dataclass

I64_MAX = (1 << 63) - 1


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable parameters of one LCG implementation."""

    name: str
    modulus: int
    multiplier: int
    increment: int
    msb: int = 63
    lsb: int = 0
    default_offset: int = 0

    def __post_init__(self):
        if not (0 <= self.lsb <= self.msb <= 63):
            raise ValueError(f"Invalid bit window for {self.name}: msb={self.msb} lsb={self.lsb}")
        if self.modulus < 0:
            raise ValueError(f"Invalid modulus for {self.name}: {self.modulus}")
        if self.default_offset < 0:
            raise ValueError(f"Invalid default offset for {self.name}: {self.default_offset}")

    @property
    def bitmask(self) -> int:
        """Mask applied after shifting the accumulator right by lsb."""
        if self.msb == 63 and self.lsb == 0:
            # Full window keeps everything but the sign bit.
            return I64_MAX
        return (1 << (self.msb - self.lsb + 1)) - 1

    @property
    def wraps(self) -> bool:
        """A zero modulus means plain 64-bit wraparound arithmetic."""
        return self.modulus == 0
