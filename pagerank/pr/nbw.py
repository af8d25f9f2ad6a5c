"""用 NetworkX 计算参考 PageRank，并与迭代结果的 Top-k 排名对比"""
import logging

import networkx as nx
import numpy as np

from .sparse import SparseMatrix

logger = logging.getLogger(__name__)


def to_networkx(M: SparseMatrix) -> nx.MultiDiGraph:
    # 用多重图保留重复边，这样转移概率与 H 矩阵一致
    G = nx.MultiDiGraph()
    G.add_nodes_from(range(M.m))
    for i, row in enumerate(M.rows):
        for c in row.cols:
            G.add_edge(i, int(c))
    return G


def reference_scores(M: SparseMatrix, tol: float = 1e-10, max_iter: int = 1000) -> np.ndarray:
    """不带阻尼（alpha=1.0）的参考 PageRank，悬挂节点均匀分配

    图是周期性的时候 NetworkX 不会收敛，会抛出 PowerIterationFailedConvergence。
    """
    G = to_networkx(M)
    pr = nx.pagerank(G, alpha=1.0, tol=tol, max_iter=max_iter)
    return np.array([pr[i] for i in range(M.m)], dtype=np.float64)


def top_k(scores, k: int = 100):
    """按分数从高到低取前 k 个 (节点, 分数)"""
    scores = np.asarray(scores)
    top_indices = np.argsort(-scores, kind="stable")[:k]
    return [(int(i), float(scores[i])) for i in top_indices]


def write_ranking(path: str, ranking):
    with open(path, "w", encoding="utf-8") as f:
        for node, score in ranking:
            f.write(f"{node} {score:.16f}\n")
    logger.info("已写入 %s", path)


def compare_rankings(user_nodes, ref_nodes, topk: int = 100) -> dict:
    user_nodes = list(user_nodes)[:topk]
    ref_nodes = list(ref_nodes)[:topk]
    set_user = set(user_nodes)
    set_ref = set(ref_nodes)

    intersection = set_user & set_ref
    accuracy = len(intersection) / topk * 100 if topk else 0.0

    only_in_ref = [n for n in ref_nodes if n not in set_user]
    only_in_user = [n for n in user_nodes if n not in set_ref]
    positional_mismatches = [
        (i + 1, u, r)
        for i, (u, r) in enumerate(zip(user_nodes, ref_nodes)) if u != r
    ]

    logger.info("Top-%d intersection count: %d", topk, len(intersection))
    logger.info("Accuracy: %.2f%%", accuracy)
    for pos, u, r in positional_mismatches:
        logger.debug("Position %d: User %d vs Reference %d", pos, u, r)

    return {
        "intersection": len(intersection),
        "accuracy": accuracy,
        "only_in_ref": only_in_ref,
        "only_in_user": only_in_user,
        "positional_mismatches": positional_mismatches,
    }
