"""命令行参数：pagerank [data_path] [iterations] [ranking_path] [topk] [-v] [--check]"""
from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigError

DEFAULT_DATA_PATH = "exemple.dat"
DEFAULT_ITERATIONS = 1000
DEFAULT_TOPK = 100

FLAGS = ("-v", "--check")


def _positive_int(value: str, name: str, allow_zero: bool = False) -> int:
    try:
        x = int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if x < 0 or (x == 0 and not allow_zero):
        raise ConfigError(f"{name} out of range: {x}")
    return x


@dataclass
class Config:
    data_path: str = DEFAULT_DATA_PATH
    iterations: int = DEFAULT_ITERATIONS
    ranking_path: Optional[str] = None
    topk: int = DEFAULT_TOPK
    verbose: bool = False
    check: bool = False

    @classmethod
    def from_argv(cls, argv: List[str]) -> "Config":
        args = [a for a in argv if a not in FLAGS]
        unknown = [a for a in args if a.startswith("--")]
        if unknown:
            raise ConfigError(f"unknown option {unknown[0]}")
        if len(args) > 4:
            raise ConfigError(f"too many arguments: {len(args)}")

        cfg = cls(verbose="-v" in argv, check="--check" in argv)
        if len(args) >= 1:
            cfg.data_path = args[0]
        if len(args) >= 2:
            cfg.iterations = _positive_int(args[1], "iterations", allow_zero=True)
        if len(args) >= 3:
            cfg.ranking_path = args[2]
        if len(args) >= 4:
            cfg.topk = _positive_int(args[3], "topk")
        return cfg
