"""
pytest配置文件

定义测试的全局配置和fixture。
"""

import os
import pytest
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dyno_estimate.config import config_manager
from dyno_estimate.estimator import DEFAULT_INPUTS, load_configuration


@pytest.fixture
def sample_inputs():
    """原始计算器的默认输入"""
    return dict(DEFAULT_INPUTS)


@pytest.fixture
def sample_config(sample_inputs):
    """默认输入对应的配置"""
    return load_configuration(sample_inputs)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """每个测试使用不受环境变量影响的全局设置"""
    for name in list(os.environ):
        if name.startswith("DYNO_ESTIMATE_"):
            monkeypatch.delenv(name)
    config_manager.reload()
