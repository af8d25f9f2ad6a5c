"""行优先稀疏矩阵：每行只保存非零元素的 (列号, 值)"""
import logging

import numpy as np
from scipy import sparse

logger = logging.getLogger(__name__)

# 列号和值放在同一个结构化数组里，二者长度天然一致
ENTRY_DTYPE = np.dtype([("col", np.uint32), ("val", np.float64)])


class SparseRow:
    __slots__ = ("entries",)

    def __init__(self, cols=None):
        if cols is None or len(cols) == 0:
            self.entries = np.empty(0, dtype=ENTRY_DTYPE)
            return
        self.entries = np.empty(len(cols), dtype=ENTRY_DTYPE)
        self.entries["col"] = cols
        # 输入图是 0/1 邻接矩阵，每条边权重为 1
        self.entries["val"] = 1.0

    @property
    def nnz(self) -> int:
        return len(self.entries)

    @property
    def cols(self):
        return self.entries["col"]

    @property
    def vals(self):
        return self.entries["val"]

    def is_dangling(self) -> bool:
        """没有出边的节点"""
        return len(self.entries) == 0


class SparseMatrix:
    def __init__(self, m: int, n: int):
        self.m = m
        self.n = n
        self.rows = [SparseRow() for _ in range(m)]

    def __repr__(self):
        return f"SparseMatrix({self.m} by {self.n}, nnz={self.nnz})"

    @property
    def nnz(self) -> int:
        return sum(row.nnz for row in self.rows)

    def set_row(self, i: int, cols):
        """按最终的非零列表填充第 i 行，所有值置为 1.0（只在构造时调用）"""
        self.rows[i] = SparseRow(cols)

    def dangling(self):
        return np.array([i for i, row in enumerate(self.rows) if row.is_dangling()],
                        dtype=np.int64)

    def to_csr(self) -> sparse.csr_matrix:
        """转换成 scipy 的 CSR 矩阵，重复的 (行, 列) 会被累加"""
        counts = np.fromiter((row.nnz for row in self.rows), dtype=np.int64, count=self.m)
        indptr = np.zeros(self.m + 1, dtype=np.int64)
        np.cumsum(counts, out=indptr[1:])
        if indptr[-1] > 0:
            indices = np.concatenate([row.cols for row in self.rows]).astype(np.int64)
            data = np.concatenate([row.vals for row in self.rows])
        else:
            indices = np.zeros(0, dtype=np.int64)
            data = np.zeros(0, dtype=np.float64)
        H = sparse.csr_matrix((data, indices, indptr), shape=(self.m, self.n))
        H.sum_duplicates()
        return H

    @classmethod
    def from_edges(cls, m: int, n: int, edges):
        """由 (起点, 终点) 边列表构造矩阵，保持每行内边的出现顺序"""
        out_links = [[] for _ in range(m)]
        for src, dst in edges:
            out_links[src].append(dst)
        M = cls(m, n)
        for i, links in enumerate(out_links):
            if links:
                M.set_row(i, links)
        return M

    def release(self):
        if self.rows is not None:
            for row in self.rows:
                row.entries = None
        self.rows = None


def new_matrix(m: int, n: int) -> SparseMatrix:
    """m 行 n 列的空矩阵，每一行都没有非零元素"""
    return SparseMatrix(m, n)


def free_matrix(M) -> bool:
    """先释放每一行，再释放行数组；矩阵不存在或已释放时返回 False"""
    if M is None or M.rows is None:
        return False
    M.release()
    return True


def to_h(M: SparseMatrix):
    """把 0/1 邻接矩阵原地转换成行随机矩阵 H

    每个非零元素除以所在行的非零个数。悬挂节点（空行）保持不变，
    它们的概率质量在迭代时再均匀分配。该转换不可逆，也不能重复调用。
    """
    dangling = 0
    for row in M.rows:
        if row.nnz == 0:
            dangling += 1
            continue
        row.entries["val"] /= row.nnz
    logger.info("H 矩阵转换完成，悬挂节点 %d 个", dangling)
    return M
