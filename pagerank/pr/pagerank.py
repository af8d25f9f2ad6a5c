import logging
import os
import sys
import time

import networkx as nx
import numpy as np
import psutil

from .config import Config
from .errors import ConfigError, PageRankError
from .nbw import compare_rankings, reference_scores, top_k, write_ranking
from .smio import load_matrix, write_matrix, write_vector
from .sparse import SparseMatrix, free_matrix, to_h
from .vector import Vector, uniform_vector

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def score(v: Vector, M: SparseMatrix, k: int) -> Vector:
    """幂迭代计算 PageRank，原地修改并返回 v

    每次迭代把 v 左乘 H 矩阵：非悬挂节点 i 按边权把 v[i] 分给各出边终点，
    悬挂节点 i 把 v[i]/m 分给所有节点。不带阻尼，固定迭代 k 次，不检查收敛。
    要求 M 为 m×m 且 v.dim == m，这里不做检查。
    """
    m = M.m
    x = v.values
    # 累加向量只分配一次，每次迭代结束后清零
    v_new = np.zeros(m, dtype=np.float64)
    debug = logger.isEnabledFor(logging.DEBUG)

    for iteration in range(k):
        # 悬挂节点的贡献
        dead_end_sum = 0.0
        for i, row in enumerate(M.rows):
            if row.nnz == 0:
                dead_end_sum += x[i]
            else:
                # 同一行里可能有重复的列号，必须用 add.at 累加
                np.add.at(v_new, row.cols, x[i] * row.vals)
        if dead_end_sum:
            v_new += dead_end_sum / m

        if debug:
            err = np.sum(np.abs(v_new - x))
            logger.debug("迭代 %d: 误差 = %.10f", iteration + 1, err)

        x[:] = v_new
        v_new.fill(0)

    return v


def score_csr(v: Vector, M: SparseMatrix, k: int) -> Vector:
    """与 score 相同，但在 scipy CSR 矩阵上做向量化的乘法"""
    m = M.m
    x = v.values
    HT = M.to_csr().T.tocsr()
    dangling = M.dangling()

    for _ in range(k):
        v_new = HT.dot(x)
        if len(dangling):
            v_new += x[dangling].sum() / m
        x[:] = v_new

    return v


def get_memory_usage():
    """获取当前进程的内存使用情况（MB）"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / (1024 * 1024)


def run(cfg: Config, out=None):
    out = out or sys.stdout
    start_time = time.time()

    M = load_matrix(cfg.data_path)
    write_matrix(out, M)

    to_h(M)
    write_matrix(out, M)

    r = uniform_vector(M.m)
    write_vector(out, r)

    logger.info("开始计算 PageRank (%d 次迭代)...", cfg.iterations)
    r = score(r, M, cfg.iterations)
    write_vector(out, r)
    logger.info("结果向量之和: %f", r.total())

    topk = min(cfg.topk, M.m)
    ranking = top_k(r.values, topk)
    if cfg.ranking_path:
        write_ranking(cfg.ranking_path, ranking)
    if cfg.check:
        try:
            ref = top_k(reference_scores(M), topk)
        except nx.PowerIterationFailedConvergence:
            logger.warning("NetworkX 参考结果未收敛，跳过对比")
        else:
            compare_rankings([n for n, _ in ranking], [n for n, _ in ref], topk)

    free_matrix(M)

    elapsed_time = time.time() - start_time
    logger.info("总计用时: %.2f 秒", elapsed_time)
    logger.info("最大内存使用: %.2f MB", get_memory_usage())
    return r


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        cfg = Config.from_argv(argv)
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)
        logger.error("%s", e)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if cfg.verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        run(cfg)
    except (PageRankError, OSError) as e:
        logger.error("%s", e)
        sys.exit(1)
    except MemoryError:
        logger.error("memory error")
        sys.exit(1)
    return 0


if __name__ == "__main__":
    sys.exit(main())
