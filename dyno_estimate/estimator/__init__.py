"""
估算引擎模块

提供核心的容量估算算法，包括推荐dyno数量、吞吐能力、数据库与Redis连接数等指标的计算。
"""

from .base import ResourceEstimator, estimate, advisories, environment_variables, scale_range
from .configs import Configuration, Metrics, DEFAULT_INPUTS, load_configuration, normalize_keys
from .errors import EstimationError, InvalidConfigurationError, DegenerateCapacityError
from .session import EstimatorSession

__all__ = [
    "ResourceEstimator",
    "estimate",
    "advisories",
    "environment_variables",
    "scale_range",
    "Configuration",
    "Metrics",
    "DEFAULT_INPUTS",
    "load_configuration",
    "normalize_keys",
    "EstimationError",
    "InvalidConfigurationError",
    "DegenerateCapacityError",
    "EstimatorSession",
]
