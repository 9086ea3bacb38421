import numpy as np
import pytest

M = np.nan


@pytest.fixture
def matrix_a():
    return np.array([
        [M, 5, 11, 9],
        [10, M, 8, 7],
        [7, 14, M, 8],
        [12, 6, 15, M],
    ])


@pytest.fixture
def matrix_b():
    return np.array([
        [M, 1, 10, 10, 10, 2],
        [1, M, 2, 10, 10, 10],
        [10, 2, M, 1, 10, 10],
        [10, 10, 1, M, 2, 10],
        [10, 10, 10, 2, M, 1],
        [2, 10, 10, 10, 1, M],
    ])


def random_matrix(rng, n, low=1, high=100, integer=False):
    if integer:
        mx = rng.integers(low, high, size=(n, n)).astype(float)
    else:
        mx = rng.uniform(low, high, size=(n, n))
    np.fill_diagonal(mx, np.nan)
    return mx


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


MATRIX_A_DAT = """\
set NODES := 1 2 3 4;

param dist : 1 2 3 4 :=
1 . 5 11 9
2 10 . 8 7
3 7 14 . 8
4 12 6 15 .
;
"""


@pytest.fixture
def matrix_a_dat(tmp_path):
    path = tmp_path / 'a4.dat'
    path.write_text(MATRIX_A_DAT)
    return str(path)


REUSED_SOURCE_DAT = """\
param dist : 1 2 3 4 5 6 :=
1 . 42 4 29 1 16
2 42 . 16 5 38 9
3 4 16 . 42 1 23
4 29 5 42 . 49 10
5 1 38 1 49 . 44
6 16 9 23 10 44 .
;
"""


@pytest.fixture
def reused_source_dat(tmp_path):
    path = tmp_path / 's6.dat'
    path.write_text(REUSED_SOURCE_DAT)
    return str(path)
