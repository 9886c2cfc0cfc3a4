"""
部署平台模块

提供dyno类型的规格目录，用于确定每个dyno可用的CPU核数。
"""

from .base import DynoSpecs
from .dynos import DYNO_SPECS, get_dyno_specs, list_supported_dynos, get_dynos_by_tier

__all__ = [
    "DynoSpecs",
    "DYNO_SPECS",
    "get_dyno_specs",
    "list_supported_dynos",
    "get_dynos_by_tier",
]
