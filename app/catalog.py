"""Fixed lookup tables: generation ID ranges and the starter catalog."""
from types import MappingProxyType

# National dex ID ranges per generation, inclusive
GENERATION_RANGES = MappingProxyType({
    1: (1, 151),
    2: (152, 251),
    3: (252, 386),
    4: (387, 493),
    5: (494, 649),
    6: (650, 721),
    7: (722, 809),
    8: (810, 1008),
})

# Catalog index -> starter Pokemon ID, three starters per generation
STARTERS = MappingProxyType({
    1: 1,
    2: 4,
    3: 7,
    4: 152,
    5: 155,
    6: 158,
    7: 252,
    8: 255,
    9: 258,
    10: 387,
    11: 390,
    12: 393,
    13: 495,
    14: 498,
    15: 501,
    16: 650,
    17: 653,
    18: 656,
    19: 722,
    20: 725,
    21: 728,
    22: 810,
    23: 813,
    24: 816,
    25: 909,
    26: 912,
    27: 906,
})


class InvalidGenerationError(ValueError):
    def __init__(self, generation: int):
        super().__init__("invalid generation number")
        self.generation = generation


def get_generation_range(generation: int) -> tuple[int, int]:
    """Returns the inclusive (start_id, end_id) pair for a generation."""
    try:
        return GENERATION_RANGES[generation]
    except KeyError:
        raise InvalidGenerationError(generation) from None
