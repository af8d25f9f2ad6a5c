"""PageRank 计算中的自定义异常"""


class PageRankError(Exception):
    """所有 PageRank 异常的基类"""
    pass


class MatrixFormatError(PageRankError):
    """输入的稀疏矩阵文本无法解析"""
    pass


class ConfigError(PageRankError):
    """命令行参数不合法"""
    pass
