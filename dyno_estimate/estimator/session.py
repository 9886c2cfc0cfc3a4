"""
交互式估算会话

持有当前配置及其指标。每次修改配置都会同步重新计算并整体替换指标，
修改失败时保留之前的状态。
"""

import logging
from typing import Dict, List, Optional, Tuple

from .base import ResourceEstimator, advisories, environment_variables, scale_range
from .configs import Configuration, Metrics, DEFAULT_INPUTS, load_configuration

logger = logging.getLogger(__name__)


class EstimatorSession:
    """估算会话"""

    def __init__(self, configuration: Optional[Configuration] = None,
                 estimator: Optional[ResourceEstimator] = None):
        self.estimator = estimator or ResourceEstimator()
        self._configuration = configuration or load_configuration(DEFAULT_INPUTS)
        self._metrics = self.estimator.estimate(self._configuration)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def oversubscribed(self) -> bool:
        return self._metrics.oversubscribed

    def update(self, **changes) -> Metrics:
        """
        修改配置并重新计算

        Raises:
            InvalidConfigurationError: 修改后的配置不合法
            DegenerateCapacityError: 修改后的配置无法计算
        """
        configuration = self._configuration.with_changes(**changes)
        metrics = self.estimator.estimate(configuration)

        self._configuration = configuration
        self._metrics = metrics
        logger.debug("配置已更新: %s", ", ".join(sorted(changes)))
        return metrics

    def set_web_dynos(self, count: Optional[int]) -> Metrics:
        """指定web dyno数量，None 表示恢复为推荐值"""
        return self.update(actual_web_dynos=count)

    def reset(self) -> Metrics:
        """恢复默认配置"""
        return self.replace(load_configuration(DEFAULT_INPUTS))

    def replace(self, configuration: Configuration) -> Metrics:
        """整体替换配置"""
        metrics = self.estimator.estimate(configuration)
        self._configuration = configuration
        self._metrics = metrics
        return metrics

    def slider_range(self, floor: int = 10) -> Tuple[int, int]:
        return scale_range(self._metrics.recommended_web_dynos, floor)

    def advisories(self) -> List[str]:
        return advisories(self._configuration, self._metrics)

    def environment_variables(self) -> Dict[str, str]:
        return environment_variables(self._configuration)
