"""Per-trial random streams.

Each trial gets its own random.Random seeded by a pure function of the
base seed and the trial index, so trials can run in any process and in
any order and still reproduce exactly.
"""

import random

_MASK_64 = 0xFFFFFFFFFFFFFFFF
_GOLDEN_GAMMA = 0x9E3779B97F4A7C15


def derive_trial_seed(base_seed: int, trial_index: int) -> int:
    """Mix a base seed and trial index into a 64-bit trial seed (splitmix64 finalizer)."""
    z = (base_seed + trial_index + _GOLDEN_GAMMA) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def trial_rng(base_seed: int, trial_index: int) -> random.Random:
    """Create the independent random stream for one trial."""
    return random.Random(derive_trial_seed(base_seed, trial_index))
