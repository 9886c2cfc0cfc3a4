"""
数据格式化工具

将估算结果渲染为表格、JSON或CSV文本。
"""

import json
from typing import Dict, Any, List, Optional
from tabulate import tabulate

# CSV 输出的指标列
METRIC_COLUMNS = [
    "recommended_web_dynos", "effective_web_dynos", "max_requests_per_dyno",
    "actual_capacity", "capacity_utilization", "web_db_connections",
    "worker_db_connections", "total_db_connections", "web_redis_connections",
    "worker_redis_connections", "redis_connections", "oversubscribed"
]


def format_results(result: Dict[str, Any], format_type: str = "table",
                   verbose: bool = False) -> str:
    """
    格式化估算结果

    Args:
        result: 包含 inputs, metrics, environment, advisories 的结果字典
        format_type: 输出格式 ("table", "json", "csv")
        verbose: 是否显示详细信息

    Returns:
        格式化后的字符串
    """
    if format_type == "json":
        return json.dumps(result, indent=2, ensure_ascii=False)

    elif format_type == "csv":
        return format_results_csv(result["metrics"])

    else:  # table format
        return format_results_table(result, verbose)


def format_results_table(result: Dict[str, Any], verbose: bool = False) -> str:
    """格式化为表格形式"""
    inputs = result["inputs"]
    metrics = result["metrics"]
    lines = []

    lines.append("=" * 60)
    lines.append("Dyno资源估算结果")
    lines.append("=" * 60)

    # 输入配置
    lines.append(f"\n流量: {inputs['requests_per_second']} req/s, "
                 f"P90 {inputs['p90_request_time_ms']} ms")
    topology = (f"拓扑: {inputs['puma_workers']} workers x {inputs['puma_threads']} threads, "
                f"{inputs['dyno_cores']} 核")
    if result.get("dyno_type"):
        topology += f" ({result['dyno_type']})"
    lines.append(topology)
    if verbose:
        lines.append(f"安全系数: {metrics['safety_factor']:.0%}")
        lines.append(f"连接池建模: {inputs['db_pool_scope']}")
        lines.append(f"每线程吞吐: {metrics['requests_per_thread_per_second']:.2f} req/s")

    # web dyno
    web_dynos = str(metrics["recommended_web_dynos"])
    if metrics["effective_web_dynos"] != metrics["recommended_web_dynos"]:
        web_dynos += f" (实际 {metrics['effective_web_dynos']})"

    capacity_data = [
        ["推荐web dyno", web_dynos],
        ["单dyno容量", f"{metrics['max_requests_per_dyno']} req/s"],
        ["总容量", f"{metrics['actual_capacity']} req/s"],
        ["利用率", f"{metrics['capacity_utilization']}%"],
    ]
    lines.append("\n容量:")
    lines.append(tabulate(capacity_data, headers=["指标", "值"], tablefmt="grid"))

    connection_data = [
        ["数据库", metrics["web_db_connections"], metrics["worker_db_connections"],
         metrics["total_db_connections"]],
        ["Redis", metrics["web_redis_connections"], metrics["worker_redis_connections"],
         metrics["redis_connections"]],
    ]
    lines.append("\n连接数:")
    lines.append(tabulate(connection_data, headers=["类型", "Web", "Workers", "合计"], tablefmt="grid"))

    lines.append("\n环境变量:")
    for name, value in result.get("environment", {}).items():
        lines.append(f"  {name}={value}")

    if result.get("advisories"):
        lines.append("\n提示:")
        for i, message in enumerate(result["advisories"], 1):
            lines.append(f"{i}. {message}")

    return "\n".join(lines)


def format_results_csv(metrics: Dict[str, Any]) -> str:
    """格式化为CSV形式"""
    csv_lines = [",".join(METRIC_COLUMNS)]
    csv_lines.append(",".join(str(metrics[column]) for column in METRIC_COLUMNS))
    return "\n".join(csv_lines)


def format_scale_results(rows: List[Dict[str, Any]], format_type: str = "table") -> str:
    """
    格式化不同web dyno数量下的利用率

    Args:
        rows: 每个dyno数量对应的指标字典
        format_type: 输出格式
    """
    if format_type == "json":
        return json.dumps(rows, indent=2, ensure_ascii=False)

    if format_type == "csv":
        lines = ["web_dynos,actual_capacity,capacity_utilization,total_db_connections,redis_connections"]
        for row in rows:
            lines.append(f"{row['effective_web_dynos']},{row['actual_capacity']},"
                         f"{row['capacity_utilization']},{row['total_db_connections']},"
                         f"{row['redis_connections']}")
        return "\n".join(lines)

    data = []
    for row in rows:
        marker = "*" if row["effective_web_dynos"] == row["recommended_web_dynos"] else ""
        data.append([
            f"{row['effective_web_dynos']}{marker}",
            f"{row['actual_capacity']} req/s",
            f"{row['capacity_utilization']}%",
            row["total_db_connections"],
            row["redis_connections"],
        ])

    headers = ["Web dyno", "总容量", "利用率", "数据库连接", "Redis连接"]
    lines = [tabulate(data, headers=headers, tablefmt="grid")]
    if rows:
        lines.append(f"* 推荐值: {rows[0]['recommended_web_dynos']}")
    return "\n".join(lines)


def format_environment(environment: Dict[str, str], app: Optional[str] = None) -> str:
    """格式化环境变量，指定 app 时输出 heroku config:set 命令"""
    assignments = [f"{name}={value}" for name, value in environment.items()]
    if app:
        return f"heroku config:set {' '.join(assignments)} -a {app}"
    return "\n".join(assignments)


def format_dyno_table(dynos: Dict[str, Dict[str, Any]]) -> str:
    """格式化dyno类型列表"""
    data = []
    for key, info in dynos.items():
        data.append([
            key,
            info["tier"],
            info["cores"],
            f"{info['memory_gb']:g} GB",
            "独占" if info["dedicated"] else "共享",
            f"${info['price_usd_month']:g}" if info["price_usd_month"] else "N/A",
        ])

    headers = ["类型", "等级", "CPU核数", "内存", "CPU", "月费"]
    return tabulate(data, headers=headers, tablefmt="grid")
