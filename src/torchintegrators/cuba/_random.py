import enum

# Bits 8-31 of Cuba's `flags` select the Ranlux luxury level.
_LEVEL_SHIFT = 8


class RandomNumberSource(enum.Enum):
    """Random number generator used by Cuba's Monte Carlo algorithms."""

    SOBOL = "sobol"
    MERSENNE_TWISTER = "mersenne-twister"
    RANLUX = "ranlux"

    @classmethod
    def from_settings(cls, seed: int, flags: int) -> "RandomNumberSource":
        """Generator Cuba selects for the given ``seed`` and ``flags``."""
        if seed == 0:
            return cls.SOBOL
        if flags >> _LEVEL_SHIFT:
            return cls.RANLUX
        return cls.MERSENNE_TWISTER
