"""
估算异常定义

输入校验失败与容量计算退化时抛出的异常。
"""

from typing import List, Tuple


class EstimationError(ValueError):
    """估算相关异常的基类"""


class InvalidConfigurationError(EstimationError):
    """输入配置不合法，拒绝计算"""

    def __init__(self, message: str, errors: List[Tuple[str, str]] = None):
        self.errors = list(errors or [])
        if self.errors:
            details = "; ".join(f"{field}: {msg}" for field, msg in self.errors)
            message = f"{message} ({details})"
        super().__init__(message)


class DegenerateCapacityError(EstimationError):
    """单个dyno的最大吞吐量不是有限正数，无法推荐dyno数量"""
