"""配置常量模块 -- 可通过环境变量覆盖

包含数据目录、数据库路径等可配置常量。
"""

import os
from pathlib import Path

SERVICE_NAME = "tasktrack-api"


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKTRACK_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKTRACK_DB_PATH",
        str(_get_base_dir() / "sqlite" / "tasktrack.db"),
    )
