"""稀疏矩阵与向量的文本读写

输入格式::

    SparseMatrix: <m> by <n>
    row 0: <col> <col> ... -1
    row 1: -1

与 fscanf 的 " SparseMatrix: %u by %u"、" row %u:"、"%d" 一样扫描，
空白可有可无，不关心换行位置。
"""
import logging
import re

from .errors import MatrixFormatError
from .sparse import SparseMatrix
from .vector import Vector

logger = logging.getLogger(__name__)

_HEADER = re.compile(r"\s*SparseMatrix:\s*([0-9]+)\s*by\s*([0-9]+)")
_ROW = re.compile(r"\s*row\s*([0-9]+):")
_COLUMN = re.compile(r"\s*(-?[0-9]+)(?::(\S+))?")


def _column(match, i: int, n: int):
    """解析一个列号；遇到负数（结束标记 -1）返回 None"""
    c = int(match.group(1))
    val = match.group(2)
    if c < 0:
        if val is not None:
            raise MatrixFormatError(f"error reading line {i}: bad terminator {match.group(0).strip()!r}")
        return None
    if c >= n:
        raise MatrixFormatError(f"error reading line {i}: column {c} out of range (n={n})")
    if val is not None:
        # 只接受未归一化的输出，即值仍然是 1
        try:
            v = float(val)
        except ValueError:
            raise MatrixFormatError(f"error reading line {i}: bad value {val!r}") from None
        if v != 1.0:
            raise MatrixFormatError(f"error reading line {i}: non-binary value {c}:{val}")
    return c


def read_matrix(fp) -> SparseMatrix:
    """从文本读入 0/1 稀疏矩阵，每个非零元素的值为 1.0"""
    text = fp.read()

    header = _HEADER.match(text)
    if header is None:
        raise MatrixFormatError("error reading dimensions")
    m, n = int(header.group(1)), int(header.group(2))
    pos = header.end()

    M = SparseMatrix(m, n)
    for i in range(m):
        label = _ROW.match(text, pos)
        if label is None:
            raise MatrixFormatError(f"error reading line {i}")
        pos = label.end()
        r = int(label.group(1))
        if r != i:
            logger.warning("第 %d 行的标号为 %d，按出现顺序处理", i, r)

        cols = []
        while True:
            col = _COLUMN.match(text, pos)
            if col is None:
                raise MatrixFormatError(f"error reading line {i} col x")
            pos = col.end()
            c = _column(col, i, n)
            if c is None:
                break
            cols.append(c)
        if cols:
            M.set_row(i, cols)

    return M


def load_matrix(path: str) -> SparseMatrix:
    logger.info("开始加载数据 %s ...", path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            M = read_matrix(f)
        except UnicodeDecodeError as e:
            raise MatrixFormatError(f"{path} is not valid UTF-8 text: {e.reason}") from e
    logger.info("数据加载完成，共有 %d 个节点和 %d 条边", M.m, M.nnz)
    return M


def write_matrix(fp, M: SparseMatrix):
    """输出稀疏矩阵；归一化之后的结果不能再被 read_matrix 读入"""
    fp.write(f"SparseMatrix: {M.m} by {M.n}\n")
    for i, row in enumerate(M.rows):
        fp.write(f"row {i}: ")
        for c, v in zip(row.cols, row.vals):
            fp.write("%u:%1.5g " % (int(c), float(v)))
        fp.write("-1\n")


def write_vector(fp, v: Vector):
    fp.write(f"Vector: {v.dim}\n")
    for x in v.values:
        fp.write("%1.5g " % float(x))
    fp.write("\n")
