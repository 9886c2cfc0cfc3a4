#!/usr/bin/env python3
"""
Dyno-Estimate 基本使用示例

演示如何使用Dyno-Estimate估算web dyno数量和连接数。
"""

import sys
import os

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from dyno_estimate import EstimatorSession, EstimationError, get_dyno_specs


def main():
    """主函数"""
    print("=== Dyno-Estimate 基本使用示例 ===\n")

    # 1. 使用Performance-L dyno的CPU核数
    dyno = get_dyno_specs("performance-l")
    print(f"dyno类型: {dyno.name} ({dyno.cores} 核, {dyno.memory_gb} GB)\n")

    # 2. 创建会话，每次修改配置都会重新计算
    session = EstimatorSession()
    session.update(requests_per_second=250, p90_request_time_ms=400, dyno_cores=dyno.cores)

    metrics = session.metrics
    print(f"推荐web dyno: {metrics.recommended_web_dynos}")
    print(f"单dyno容量: {metrics.max_requests_per_dyno} req/s")
    print(f"数据库连接: {metrics.total_db_connections} "
          f"(web {metrics.web_db_connections} / workers {metrics.worker_db_connections})")
    print(f"Redis连接: {metrics.redis_connections}")

    # 3. 调整web dyno数量观察利用率
    low, high = session.slider_range()
    print(f"\n调整web dyno ({low}-{high}):")
    for count in range(low, high + 1):
        adjusted = session.set_web_dynos(count)
        print(f"  {count:>3}: 容量 {adjusted.actual_capacity} req/s, 利用率 {adjusted.capacity_utilization}%")
    session.set_web_dynos(None)

    # 4. 非法输入会被拒绝，状态保持不变
    try:
        session.update(puma_workers=0)
    except EstimationError as e:
        print(f"\n估算失败: {e}")

    print("\n环境变量:")
    for name, value in session.environment_variables().items():
        print(f"  {name}={value}")

    print("\n=== 示例完成 ===")


if __name__ == "__main__":
    main()
