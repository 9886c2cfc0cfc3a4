"""
CLI命令实现

提供命令行界面的具体命令实现。
"""

import click
import json
import logging
from typing import Optional, Dict, Any, Tuple
from pydantic import ValidationError

from .. import __version__
from ..config import get_settings
from ..estimator import (
    Configuration,
    DEFAULT_INPUTS,
    EstimationError,
    EstimatorSession,
    InvalidConfigurationError,
    load_configuration,
    normalize_keys,
)
from ..platform import DynoSpecs, get_dyno_specs, list_supported_dynos, get_dynos_by_tier
from ..utils.formatters import format_results, format_scale_results, format_environment, format_dyno_table
from ..utils.logging import setup_logger

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(version=__version__, prog_name="dyno-estimate")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="日志级别")
def cli(log_level: Optional[str]):
    """Dyno容量估算工具

    根据每秒请求数、P90耗时和Puma进程拓扑，估算需要的web dyno数量、
    单dyno吞吐能力以及数据库与Redis连接数。
    """
    try:
        setup_logger(log_level)
    except (ValidationError, ValueError) as e:
        click.echo(f"错误: 全局设置不合法: {e}", err=True)
        raise click.Abort()


def configuration_options(func):
    """为命令添加全部配置参数"""
    options = [
        click.option("--config-file", type=click.Path(exists=True, dir_okay=False), help="JSON配置文件"),
        click.option("--rps", "-r", "requests_per_second", type=float, help="平均每秒请求数"),
        click.option("--p90", "-l", "p90_request_time_ms", type=float, help="P90请求耗时(ms)"),
        click.option("--dyno-type", "-d", help="dyno类型 (如: standard-2x, performance-l)"),
        click.option("--dyno-cores", "-c", type=int, help="每个dyno的CPU核数"),
        click.option("--workers", "-w", "puma_workers", type=int, help="每个dyno的Puma worker数 (WEB_CONCURRENCY)"),
        click.option("--threads", "-t", "puma_threads", type=int, help="每个worker的线程数 (RAILS_MAX_THREADS)"),
        click.option("--worker-dynos", type=int, help="后台任务dyno数量"),
        click.option("--db-pool", "active_record_pool_size", type=int, help="ActiveRecord连接池大小"),
        click.option("--redis-pool", "redis_pool_size", type=int, help="每个后台任务进程的Redis连接池大小"),
        click.option("--web-dynos", "actual_web_dynos", type=int, help="实际web dyno数量（默认使用推荐值）"),
        click.option("--safety-factor", type=float, help="目标利用率上限 (0-1]"),
        click.option("--web-redis-baseline", "web_redis_connections_per_dyno", type=int,
                     help="每个web dyno的基础Redis连接数"),
        click.option("--db-pool-scope", type=click.Choice(["instance", "process"]), help="数据库连接池建模方式"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_configuration(options: Dict[str, Any]) -> Tuple[Configuration, Optional[DynoSpecs]]:
    """
    合并默认值、配置文件与命令行参数

    优先级: 默认输入 < 全局设置 < 配置文件 < 命令行参数

    Raises:
        InvalidConfigurationError: 配置文件或参数不合法
        ValueError: 不支持的dyno类型
    """
    options = dict(options)
    settings = get_settings()

    data = dict(DEFAULT_INPUTS)
    data.update(
        safety_factor=settings.safety_factor,
        web_redis_connections_per_dyno=settings.web_redis_connections_per_dyno,
        db_pool_scope=settings.db_pool_scope,
    )

    config_file = options.pop("config_file", None)
    if config_file:
        with open(config_file, "r", encoding="utf-8") as f:
            try:
                file_data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidConfigurationError(f"无法解析配置文件 {config_file}: {e}") from e
        if not isinstance(file_data, dict):
            raise InvalidConfigurationError(f"配置文件 {config_file} 必须是JSON对象")
        data.update(normalize_keys(file_data))

    dyno_specs = None
    dyno_type = options.pop("dyno_type", None)
    if dyno_type:
        dyno_specs = get_dyno_specs(dyno_type)
        data["dyno_cores"] = dyno_specs.cores

    data.update({key: value for key, value in options.items() if value is not None})
    return load_configuration(data), dyno_specs


def _write_output(text: str, output_file: Optional[str]) -> None:
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"结果已保存到: {output_file}")
    else:
        click.echo(text)


@cli.command()
@configuration_options
@click.option("--output-file", type=click.Path(), help="输出文件路径")
@click.option("--format", "-f", "output_format", type=click.Choice(["table", "json", "csv"]), help="输出格式")
@click.option("--verbose", "-v", is_flag=True, help="显示详细信息")
def estimate(output_file: Optional[str], output_format: Optional[str], verbose: bool, **options):
    """估算web dyno数量、容量和连接数"""
    output_format = output_format or get_settings().default_output_format

    try:
        configuration, dyno_specs = build_configuration(options)
        session = EstimatorSession(configuration)
    except (EstimationError, ValueError) as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()

    metrics = session.metrics
    advisories = session.advisories()
    if advisories:
        logger.info("生成 %d 条提示", len(advisories))

    result = {
        "inputs": configuration.to_inputs(),
        "dyno_type": dyno_specs.name if dyno_specs else None,
        "metrics": metrics.to_dict(),
        "environment": session.environment_variables(),
        "advisories": advisories,
    }

    _write_output(format_results(result, output_format, verbose), output_file)


@cli.command()
@configuration_options
@click.option("--min-dynos", type=int, help="web dyno数量下限")
@click.option("--max-dynos", type=int, help="web dyno数量上限")
@click.option("--output-file", type=click.Path(), help="输出文件路径")
@click.option("--format", "-f", "output_format", type=click.Choice(["table", "json", "csv"]), help="输出格式")
def scale(min_dynos: Optional[int], max_dynos: Optional[int],
          output_file: Optional[str], output_format: Optional[str], **options):
    """计算不同web dyno数量下的容量与利用率"""
    settings = get_settings()
    output_format = output_format or settings.default_output_format

    try:
        configuration, _ = build_configuration(options)
        session = EstimatorSession(configuration)
        curve = session.estimator.utilization_curve(
            configuration, min_dynos=min_dynos, max_dynos=max_dynos,
            floor=settings.scale_max_floor,
        )
    except (EstimationError, ValueError) as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()

    rows = [metrics.to_dict() for metrics in curve]
    _write_output(format_scale_results(rows, output_format), output_file)


@cli.command()
@configuration_options
@click.option("--app", "-a", help="Heroku应用名称，指定时输出 config:set 命令")
def env(app: Optional[str], **options):
    """输出需要设置的环境变量"""
    try:
        configuration, _ = build_configuration(options)
        session = EstimatorSession(configuration)
    except (EstimationError, ValueError) as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()

    click.echo(format_environment(session.environment_variables(), app))


@cli.command()
@click.option("--tier", type=click.Choice(["standard", "performance"]), help="dyno等级筛选")
def list_dynos(tier: Optional[str]):
    """列出支持的dyno类型"""
    dynos = get_dynos_by_tier(tier) if tier else list_supported_dynos()
    click.echo(format_dyno_table(dynos))


def main():
    """主程序入口"""
    cli()


if __name__ == "__main__":
    main()
