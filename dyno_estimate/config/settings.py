"""
全局系统设置

定义系统级配置参数和默认值，支持通过 DYNO_ESTIMATE_ 前缀的环境变量覆盖。
"""

from typing import Optional, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "DYNO_ESTIMATE_"


class Settings(BaseSettings):
    """系统设置类"""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 日志配置
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING", description="日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径")

    # 输出配置
    default_output_format: Literal["table", "json", "csv"] = Field(default="table", description="默认输出格式")

    # 估算默认参数
    safety_factor: float = Field(default=0.5, gt=0, le=1, description="目标利用率上限")
    web_redis_connections_per_dyno: int = Field(default=3, ge=0, description="每个web dyno的基础Redis连接数")
    db_pool_scope: Literal["instance", "process"] = Field(default="instance", description="数据库连接池建模方式")

    # web dyno调整范围上限的下界
    scale_max_floor: int = Field(default=10, ge=1, description="调整范围上限的最小值")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


class ConfigManager:
    """配置管理器"""

    def __init__(self):
        self._settings: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """获取设置实例（单例模式）"""
        if self._settings is None:
            self._settings = Settings()
        return self._settings

    def clear(self) -> None:
        """丢弃缓存的设置，下次访问时重新读取"""
        self._settings = None

    def reload(self) -> Settings:
        """重新读取环境变量"""
        self._settings = None
        return self.get_settings()

    def update_settings(self, **kwargs) -> None:
        """更新设置"""
        settings = self.get_settings()
        data = settings.model_dump()
        data.update({key: value for key, value in kwargs.items() if key in data})
        self._settings = Settings(**data)


# 全局配置管理器实例
config_manager = ConfigManager()


def get_settings() -> Settings:
    """获取全局设置"""
    return config_manager.get_settings()
