# rigid_frames/constants.py
from __future__ import annotations

# Relative tolerance for component-wise approximate equality. The threshold is
# scaled by max(1, |lhs|^2) of the left operand only.
EQUALITY_EPSILON = 1e-10

# Max ratio |vector part|^2 / |q|^2 for p * conj(q) to count as a pure scalar.
SIMILARITY_EPSILON = 1e-10

# Tried in order by rotation_for() when u and v are exactly anti-parallel.
# The first nudge that gives a non-zero cross product wins.
ANTIPARALLEL_NUDGES = (
    (1e-10, 0.0, 0.0),
    (0.0, 0.0, -1e-10),
)

# Below this angle between the inputs slerp degrades to normalized lerp.
SLERP_LINEAR_THRESHOLD = 1e-6
