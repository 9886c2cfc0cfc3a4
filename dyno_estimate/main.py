#!/usr/bin/env python3
"""
Dyno-Estimate 主程序入口

支持使用 python -m dyno_estimate.main 方式运行
"""

import sys

from .cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
