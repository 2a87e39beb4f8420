import itertools
import random

import numpy as np
import pytest

from homtran import UnitQuaternion


@pytest.fixture(autouse=True)
def seed_rng() -> None:
    random.seed(0)
    np.random.seed(0)


@pytest.fixture()
def quaternions() -> list[UnitQuaternion]:
    quats = [
        UnitQuaternion(1, 2, 3, 4),
        UnitQuaternion(0.1, 0.01, 2.3, 4),
        UnitQuaternion(1234.4134, 689.6124, 134.124, 0.5),
        UnitQuaternion(1, 1, 1, 1),
    ]
    angles = [2 * np.pi, np.pi, np.pi / 2, np.pi / 4, 0.5, 0.25, 0.1234, 0.0]
    axes = [[1, 1, 1], [1, 0, 0], [0, 1, 0], [0, 0, 1], [1, 2, 3]]
    for angle, axis in itertools.product(angles, axes):
        quats.append(UnitQuaternion.from_angle_axis(angle, axis))
    return quats


@pytest.fixture()
def translations() -> list[np.ndarray]:
    positions = np.linspace(0.0, 1.0, 6)
    return [np.array(p) for p in itertools.product(positions, repeat=3)]
