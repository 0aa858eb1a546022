import os
import random

import pytest

from ordmap import OrderedMap


SEED = int(os.environ.get('ORDMAP_TEST_SEED', '1234'))


@pytest.fixture
def rng():
    return random.Random(SEED)


@pytest.fixture
def letters(rng):
    return OrderedMap(zip('abcdefghij', range(10)), rng=rng)
