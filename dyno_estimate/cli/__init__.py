"""
命令行接口模块

提供命令行工具，作为用户与估算器交互的主要方式。
"""

from .commands import main

__all__ = ["main"]
