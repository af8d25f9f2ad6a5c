from .errors import ConfigError, MatrixFormatError, PageRankError
from .pagerank import score, score_csr
from .smio import load_matrix, read_matrix, write_matrix, write_vector
from .sparse import SparseMatrix, SparseRow, free_matrix, new_matrix, to_h
from .vector import Vector, free_vector, new_vector, uniform_vector
