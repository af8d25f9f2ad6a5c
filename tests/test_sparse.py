"""Tests for the sparse matrix container and the H transformation."""
import numpy as np
import pytest

from pagerank.pr.sparse import SparseMatrix, free_matrix, new_matrix, to_h


class TestNewMatrix:
    """Test matrix allocation and row population."""

    def test_rows_start_empty(self):
        """Every row of a new matrix is dangling."""
        M = new_matrix(3, 3)
        assert M.m == 3 and M.n == 3
        assert len(M.rows) == 3
        assert all(row.nnz == 0 for row in M.rows)
        assert M.nnz == 0
        assert M.dangling().tolist() == [0, 1, 2]

    def test_set_row_binary(self):
        """Populated rows hold exactly the given columns with value 1.0."""
        M = new_matrix(3, 3)
        M.set_row(1, [0, 2])
        row = M.rows[1]
        assert row.nnz == 2
        assert row.cols.tolist() == [0, 2]
        assert row.vals.tolist() == [1.0, 1.0]
        assert len(row.cols) == len(row.vals)

    def test_from_edges(self):
        """Edges are grouped by source in input order."""
        M = SparseMatrix.from_edges(3, 3, [(0, 2), (2, 1), (0, 1)])
        assert M.rows[0].cols.tolist() == [2, 1]
        assert M.rows[1].is_dangling()
        assert M.rows[2].cols.tolist() == [1]
        assert M.nnz == 3


class TestFreeMatrix:
    """Test matrix release."""

    def test_free(self):
        """Releasing a live matrix succeeds once."""
        M = SparseMatrix.from_edges(2, 2, [(0, 1)])
        assert free_matrix(M) is True
        assert M.rows is None
        assert free_matrix(M) is False

    def test_free_none(self):
        assert free_matrix(None) is False


class TestToH:
    """Test the row-stochastic transformation."""

    def test_rows_sum_to_one(self, random_matrix):
        """Non-dangling rows sum to 1 and dangling rows stay empty."""
        dangling = random_matrix.dangling().tolist()
        to_h(random_matrix)
        for i, row in enumerate(random_matrix.rows):
            if i in dangling:
                assert row.nnz == 0
            else:
                assert row.vals.sum() == pytest.approx(1.0)

    def test_pattern_unchanged(self, random_matrix):
        """Only values change, never the sparsity pattern."""
        before = [row.cols.tolist() for row in random_matrix.rows]
        to_h(random_matrix)
        assert [row.cols.tolist() for row in random_matrix.rows] == before

    def test_two_node(self, two_node):
        """Single out-edge keeps weight 1.0."""
        to_h(two_node)
        assert two_node.rows[0].cols.tolist() == [1]
        assert two_node.rows[0].vals.tolist() == [1.0]
        assert two_node.rows[1].nnz == 0

    def test_not_idempotent(self):
        """Applying twice divides again."""
        M = SparseMatrix.from_edges(2, 2, [(0, 0), (0, 1)])
        to_h(M)
        to_h(M)
        assert M.rows[0].vals.tolist() == [0.25, 0.25]


class TestToCsr:
    """Test the scipy CSR view."""

    def test_duplicates_summed(self):
        """Repeated columns in a row are accumulated."""
        M = SparseMatrix.from_edges(2, 2, [(0, 1), (0, 1), (0, 0)])
        to_h(M)
        H = M.to_csr()
        assert H.shape == (2, 2)
        dense = H.toarray()
        assert dense[0, 1] == pytest.approx(2 / 3)
        assert dense[0, 0] == pytest.approx(1 / 3)
        assert np.all(dense[1] == 0)

    def test_empty_matrix(self):
        H = new_matrix(3, 3).to_csr()
        assert H.nnz == 0
