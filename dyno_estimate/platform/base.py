"""
dyno规格定义

描述部署平台上各类dyno的CPU、内存等基础属性。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class DynoSpecs:
    """dyno规格数据类"""
    name: str
    tier: str             # "standard", "performance"，仅用于分类
    cores: int            # 可用CPU核数
    memory_gb: float      # 内存容量 (GB)
    dedicated: bool       # 是否独占CPU
    price_usd_month: Optional[float] = None

    def get_info(self) -> Dict[str, Any]:
        """获取规格信息"""
        return {
            "name": self.name,
            "tier": self.tier,
            "cores": self.cores,
            "memory_gb": self.memory_gb,
            "dedicated": self.dedicated,
            "price_usd_month": self.price_usd_month,
        }
