"""
内置dyno类型

预定义常见dyno类型的规格，供命令行按类型填充CPU核数。
"""

from typing import Dict, Any
from .base import DynoSpecs


DYNO_SPECS = {
    # 共享CPU
    "standard-1x": DynoSpecs(
        name="Standard-1X",
        tier="standard",
        cores=1,
        memory_gb=0.5,
        dedicated=False,
        price_usd_month=25
    ),
    "standard-2x": DynoSpecs(
        name="Standard-2X",
        tier="standard",
        cores=2,
        memory_gb=1.0,
        dedicated=False,
        price_usd_month=50
    ),

    # 独占CPU
    "performance-m": DynoSpecs(
        name="Performance-M",
        tier="performance",
        cores=2,
        memory_gb=2.5,
        dedicated=True,
        price_usd_month=250
    ),
    "performance-l": DynoSpecs(
        name="Performance-L",
        tier="performance",
        cores=8,
        memory_gb=14.0,
        dedicated=True,
        price_usd_month=500
    ),
    "performance-l-ram": DynoSpecs(
        name="Performance-L-RAM",
        tier="performance",
        cores=4,
        memory_gb=30.0,
        dedicated=True,
        price_usd_month=500
    ),
    "performance-xl": DynoSpecs(
        name="Performance-XL",
        tier="performance",
        cores=8,
        memory_gb=62.0,
        dedicated=True,
        price_usd_month=750
    ),
    "performance-2xl": DynoSpecs(
        name="Performance-2XL",
        tier="performance",
        cores=16,
        memory_gb=126.0,
        dedicated=True,
        price_usd_month=1500
    ),
}


def get_dyno_specs(dyno_name: str) -> DynoSpecs:
    """
    获取dyno规格

    Args:
        dyno_name: dyno类型名称，不区分大小写

    Returns:
        dyno规格

    Raises:
        ValueError: 不支持的dyno类型
    """
    dyno_name_lower = dyno_name.lower()

    if dyno_name_lower not in DYNO_SPECS:
        raise ValueError(f"不支持的dyno类型: {dyno_name}")

    return DYNO_SPECS[dyno_name_lower]


def list_supported_dynos() -> Dict[str, Dict[str, Any]]:
    """列出所有支持的dyno类型"""
    return {name: specs.get_info() for name, specs in DYNO_SPECS.items()}


def get_dynos_by_tier(tier: str) -> Dict[str, Dict[str, Any]]:
    """
    按等级筛选dyno类型

    Args:
        tier: dyno等级 ("standard", "performance")
    """
    all_dynos = list_supported_dynos()

    return {
        name: info for name, info in all_dynos.items()
        if info["tier"] == tier.lower()
    }
