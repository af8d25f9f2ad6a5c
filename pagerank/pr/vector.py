import numpy as np


class Vector:
    """定长稠密向量，新建时全部为 0"""

    def __init__(self, size: int):
        self.dim = size
        self.values = np.zeros(size, dtype=np.float64)

    def __getitem__(self, i):
        return self.values[i]

    def __setitem__(self, i, x):
        self.values[i] = x

    def __len__(self):
        return self.dim

    def __repr__(self):
        return f"Vector(dim={self.dim})"

    def total(self) -> float:
        return float(np.sum(self.values))


def new_vector(size: int) -> Vector:
    # 内存不足时 numpy 抛出 MemoryError，由入口统一处理
    return Vector(size)


def uniform_vector(size: int) -> Vector:
    """初始概率向量 r0，每个分量为 1/size"""
    v = Vector(size)
    if size > 0:
        v.values.fill(1.0 / size)
    return v


def free_vector(v) -> bool:
    """释放向量的存储；向量不存在或已释放时返回 False"""
    if v is None or v.values is None:
        return False
    v.values = None
    return True
