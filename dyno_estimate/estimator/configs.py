"""
估算输入与输出定义

Configuration 为经过校验的输入配置，Metrics 为由配置完整推导出的资源指标。
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Mapping, Optional, Literal
from pydantic import BaseModel as PydanticModel, ConfigDict, Field, ValidationError

from .errors import InvalidConfigurationError

# 原始计算器表单的默认输入
DEFAULT_INPUTS = {
    "requests_per_second": 100,
    "p90_request_time_ms": 500,
    "dyno_cores": 8,
    "puma_workers": 8,
    "puma_threads": 5,
    "worker_dynos": 1,
    "active_record_pool_size": 16,
    "redis_pool_size": 5,
    "actual_web_dynos": None,
}

DEFAULT_SAFETY_FACTOR = 0.5
DEFAULT_WEB_REDIS_CONNECTIONS_PER_DYNO = 3

# 数据库连接池的建模方式
DB_POOL_SCOPES = {
    "instance": "整个dyno共享一个连接池，按 min(workers*threads, pool) 计算",
    "process": "每个worker进程一个连接池，按 workers * min(threads, pool) 计算",
}


class Configuration(PydanticModel):
    """容量估算输入配置"""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        allow_inf_nan=False,
    )

    # 流量
    requests_per_second: float = Field(gt=0, alias="requestsPerSecond", description="平均每秒请求数")
    p90_request_time_ms: float = Field(gt=0, alias="p90RequestTime", description="P90请求耗时(ms)")

    # 进程拓扑
    dyno_cores: int = Field(ge=1, alias="dynoCores", description="每个dyno的CPU核数，仅用于超额订阅提示")
    puma_workers: int = Field(ge=1, alias="pumaWorkers", description="每个dyno的Puma worker进程数")
    puma_threads: int = Field(ge=1, alias="pumaThreads", description="每个worker的线程数")
    worker_dynos: int = Field(ge=0, alias="workerDynos", description="后台任务dyno数量")

    # 连接池
    active_record_pool_size: int = Field(ge=1, alias="activeRecordPoolSize", description="每个连接池的最大数据库连接数")
    redis_pool_size: int = Field(ge=1, alias="redisPoolSize", description="每个后台任务进程的最大Redis连接数")

    # 人工指定的web dyno数量，None 表示使用推荐值
    actual_web_dynos: Optional[int] = Field(default=None, ge=1, alias="actualWebDynos", description="实际web dyno数量")

    # 建模参数
    safety_factor: float = Field(default=DEFAULT_SAFETY_FACTOR, gt=0, le=1, alias="safetyFactor", description="目标利用率上限")
    web_redis_connections_per_dyno: int = Field(
        default=DEFAULT_WEB_REDIS_CONNECTIONS_PER_DYNO, ge=0,
        alias="webRedisConnectionsPerDyno", description="每个web dyno的基础Redis连接数",
    )
    db_pool_scope: Literal["instance", "process"] = Field(
        default="instance", alias="dbPoolScope", description="数据库连接池建模方式"
    )

    @property
    def threads_per_dyno(self) -> int:
        """每个dyno的总线程数"""
        return self.puma_workers * self.puma_threads

    def with_changes(self, **changes) -> "Configuration":
        """返回应用修改后重新校验的新配置"""
        data = self.model_dump()
        data.update(normalize_keys(changes))
        return load_configuration(data)

    def to_inputs(self, by_alias: bool = False) -> Dict[str, Any]:
        """导出为普通字典"""
        return self.model_dump(by_alias=by_alias)


@dataclass(frozen=True)
class Metrics:
    """由配置推导出的资源指标"""
    threads_per_dyno: int
    requests_per_thread_per_second: float
    max_requests_per_dyno: float      # 已保留两位小数
    recommended_web_dynos: int
    effective_web_dynos: int
    actual_capacity: float            # 已保留两位小数
    capacity_utilization: float       # 百分比，已保留两位小数
    web_db_connections: int
    worker_db_connections: int
    total_db_connections: int
    web_redis_connections: int
    worker_redis_connections: int
    redis_connections: int
    safety_factor: float
    oversubscribed: bool

    @property
    def differs_from_recommendation(self) -> bool:
        """web dyno数量是否与推荐值不同"""
        return self.effective_web_dynos != self.recommended_web_dynos

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """将 camelCase 别名转换为字段名"""
    aliases = {field.alias: name for name, field in Configuration.model_fields.items() if field.alias}
    return {aliases.get(key, key): value for key, value in data.items()}


def load_configuration(data: Mapping[str, Any]) -> Configuration:
    """
    从字典构建并校验配置

    同时接受 snake_case 字段名和原始表单的 camelCase 名称。

    Raises:
        InvalidConfigurationError: 任一字段缺失或不合法
    """
    try:
        return Configuration.model_validate(dict(data))
    except ValidationError as e:
        aliases = {field.alias: name for name, field in Configuration.model_fields.items()}
        errors = []
        for err in e.errors():
            field = ".".join(str(aliases.get(part, part)) for part in err["loc"]) or "<root>"
            errors.append((field, err["msg"]))
        raise InvalidConfigurationError("配置参数不合法", errors) from e
