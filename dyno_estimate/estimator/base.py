"""
资源估算器

根据流量与进程拓扑推导推荐dyno数量、单dyno吞吐能力、
数据库连接数和Redis连接数。计算为纯函数，没有副作用。
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from .configs import Configuration, Metrics
from .errors import DegenerateCapacityError, InvalidConfigurationError

logger = logging.getLogger(__name__)

# 调整web dyno数量时的默认上限下界
DEFAULT_SCALE_MAX_FLOOR = 10


def _round2(value: float) -> float:
    """四舍五入保留两位小数（0.5 向上取整）"""
    return math.floor(value * 100 + 0.5) / 100


def scale_range(recommended_web_dynos: int,
                floor: int = DEFAULT_SCALE_MAX_FLOOR) -> Tuple[int, int]:
    """web dyno数量可调整的范围 [1, max(推荐值*2, floor)]"""
    return 1, max(recommended_web_dynos * 2, floor)


def environment_variables(config: Configuration) -> Dict[str, str]:
    """部署平台上需要设置的环境变量"""
    return {
        "WEB_CONCURRENCY": str(config.puma_workers),
        "RAILS_MAX_THREADS": str(config.puma_threads),
    }


def advisories(config: Configuration, metrics: Metrics) -> List[str]:
    """生成不影响计算结果的提示信息"""
    messages = []

    if metrics.oversubscribed:
        messages.append(
            f"Puma worker数量({config.puma_workers})多于CPU核数({config.dyno_cores})，可能导致CPU争用"
        )

    if config.active_record_pool_size < config.puma_threads:
        messages.append(
            f"ActiveRecord连接池({config.active_record_pool_size})小于RAILS_MAX_THREADS"
            f"({config.puma_threads})，线程可能等待数据库连接"
        )

    if metrics.capacity_utilization > 100:
        messages.append(
            f"{metrics.effective_web_dynos}个web dyno的利用率为{metrics.capacity_utilization:.2f}%，"
            f"超过安全容量（推荐 {metrics.recommended_web_dynos} 个）"
        )

    return messages


class ResourceEstimator:
    """资源估算器主类"""

    def estimate(self, config: Configuration) -> Metrics:
        """
        由配置推导全部资源指标

        Args:
            config: 已校验的输入配置

        Returns:
            资源指标

        Raises:
            DegenerateCapacityError: 单dyno最大吞吐量不是有限正数，或推导结果超出浮点范围
        """
        # 极端输入下整数转浮点或取整可能溢出
        try:
            metrics = self._estimate(config)
        except OverflowError as e:
            raise DegenerateCapacityError(f"估算结果超出可表示范围: {e}") from e

        logger.debug("估算完成: 推荐 %d 个web dyno, 实际 %d 个, 利用率 %.2f%%",
                     metrics.recommended_web_dynos, metrics.effective_web_dynos,
                     metrics.capacity_utilization)
        return metrics

    def _estimate(self, config: Configuration) -> Metrics:
        threads_per_dyno = config.threads_per_dyno
        requests_per_thread = 1000 / config.p90_request_time_ms
        max_requests_per_dyno = threads_per_dyno * requests_per_thread * config.safety_factor

        if not (math.isfinite(max_requests_per_dyno) and max_requests_per_dyno > 0):
            raise DegenerateCapacityError(
                f"单个dyno的最大吞吐量无效: {max_requests_per_dyno!r}"
            )

        dyno_ratio = config.requests_per_second / max_requests_per_dyno
        if not math.isfinite(dyno_ratio):
            raise DegenerateCapacityError(
                f"无法计算推荐的web dyno数量: {config.requests_per_second!r} / {max_requests_per_dyno!r}"
            )
        recommended_web_dynos = math.ceil(dyno_ratio)

        # 人工指定的数量只影响下游计算，不改变推荐值
        if config.actual_web_dynos is not None:
            web_dynos = config.actual_web_dynos
        else:
            web_dynos = recommended_web_dynos

        web_db_connections = web_dynos * self._db_connections_per_dyno(config)
        worker_db_connections = config.worker_dynos * config.active_record_pool_size

        web_redis_connections = web_dynos * config.web_redis_connections_per_dyno
        worker_redis_connections = config.worker_dynos * config.redis_pool_size

        actual_capacity = max_requests_per_dyno * web_dynos
        if not math.isfinite(actual_capacity):
            raise DegenerateCapacityError(f"实际总容量无效: {actual_capacity!r}")
        capacity_utilization = config.requests_per_second / actual_capacity * 100

        return Metrics(
            threads_per_dyno=threads_per_dyno,
            requests_per_thread_per_second=requests_per_thread,
            max_requests_per_dyno=_round2(max_requests_per_dyno),
            recommended_web_dynos=recommended_web_dynos,
            effective_web_dynos=web_dynos,
            actual_capacity=_round2(actual_capacity),
            capacity_utilization=_round2(capacity_utilization),
            web_db_connections=web_db_connections,
            worker_db_connections=worker_db_connections,
            total_db_connections=web_db_connections + worker_db_connections,
            web_redis_connections=web_redis_connections,
            worker_redis_connections=worker_redis_connections,
            redis_connections=web_redis_connections + worker_redis_connections,
            safety_factor=config.safety_factor,
            oversubscribed=config.puma_workers > config.dyno_cores,
        )

    def utilization_curve(self, config: Configuration,
                          min_dynos: Optional[int] = None,
                          max_dynos: Optional[int] = None,
                          floor: int = DEFAULT_SCALE_MAX_FLOOR) -> List[Metrics]:
        """
        计算不同web dyno数量下的容量与利用率

        未指定范围时使用 scale_range() 给出的默认范围。
        """
        baseline = self.estimate(config.with_changes(actual_web_dynos=None))
        default_min, default_max = scale_range(baseline.recommended_web_dynos, floor)

        low = default_min if min_dynos is None else min_dynos
        high = default_max if max_dynos is None else max_dynos
        if low < 1:
            raise InvalidConfigurationError("web dyno数量下限必须大于等于1",
                                            [("min_dynos", str(low))])
        if high < low:
            raise InvalidConfigurationError("web dyno数量上限不能小于下限",
                                            [("max_dynos", str(high))])

        return [self.estimate(config.with_changes(actual_web_dynos=count))
                for count in range(low, high + 1)]

    def _db_connections_per_dyno(self, config: Configuration) -> int:
        """单个web dyno占用的数据库连接数"""
        if config.db_pool_scope == "process":
            return config.puma_workers * min(config.puma_threads, config.active_record_pool_size)
        return min(config.threads_per_dyno, config.active_record_pool_size)


_default_estimator = ResourceEstimator()


def estimate(config: Configuration) -> Metrics:
    """使用默认估算器计算资源指标"""
    return _default_estimator.estimate(config)
