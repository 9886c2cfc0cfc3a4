"""
Dyno-Estimate: Web应用dyno容量估算工具

根据流量（每秒请求数、P90耗时）和Puma进程拓扑，估算推荐的web dyno数量、
单dyno吞吐能力、数据库连接池和Redis连接使用量。
"""

__version__ = "0.1.0"

from .estimator.base import ResourceEstimator, estimate, advisories, environment_variables, scale_range
from .estimator.configs import Configuration, Metrics, DEFAULT_INPUTS, load_configuration
from .estimator.errors import EstimationError, InvalidConfigurationError, DegenerateCapacityError
from .estimator.session import EstimatorSession
from .platform import DynoSpecs, get_dyno_specs, list_supported_dynos

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
    "EstimationError",
    "InvalidConfigurationError",
    "DegenerateCapacityError",
    "EstimatorSession",
    "DynoSpecs",
    "get_dyno_specs",
    "list_supported_dynos",
]
