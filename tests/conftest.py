import numpy as np
import pytest

from pagerank.pr.sparse import SparseMatrix


@pytest.fixture
def two_node():
    """0 -> 1，节点 1 没有出边"""
    return SparseMatrix.from_edges(2, 2, [(0, 1)])


@pytest.fixture
def random_matrix():
    """带悬挂节点和重复列号的随机 0/1 矩阵"""
    rng = np.random.default_rng(0)
    m = 40
    M = SparseMatrix(m, m)
    for i in range(m):
        if i % 7 == 0:
            continue
        cols = rng.integers(0, m, size=rng.integers(1, 6)).tolist()
        M.set_row(i, cols)
    return M
