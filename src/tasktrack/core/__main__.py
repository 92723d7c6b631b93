"""CLI 入口模块 -- python -m tasktrack.core <command>

支持的命令：
  init-db    在配置的路径创建数据库表结构
  seed-demo  写入演示账户与演示任务（已存在时跳过）
"""

import asyncio
import sys
from datetime import UTC, datetime

from .config import get_db_path

DEMO_NAME = "Douglas Cortes"
DEMO_EMAIL = "douglas@adv.com"
DEMO_PASSWORD = "senha123"

DEMO_TASKS = [
    ("Análise de contrato", "Revisar cláusulas do contrato de prestação de serviços", "done"),
    ("Audiência de conciliação", "Comparecer à audiência no fórum central", "pending"),
    ("Preparar petição inicial", "Revisar os autos e anexar documentos necessários", "in_progress"),
]


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m tasktrack.core <command>")
        print("命令:")
        print("  init-db    创建数据库表结构")
        print("  seed-demo  写入演示账户与演示任务")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "seed-demo":
        asyncio.run(seed_demo())
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, seed-demo")
        sys.exit(1)


async def init_database() -> None:
    """创建表结构（create_store_group 内部执行 init_db）"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.close()
    print("数据库初始化完成")


async def seed_demo(db_path: str | None = None) -> bool:
    """写入演示数据

    Returns:
        True 如果写入了新数据，False 表示演示账户已存在
    """
    from tasktrack.auth import PasswordHasher, load_auth_config

    from .models import TaskStatus
    from .store import create_store_group

    db_path = db_path or get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        if await store_group.account_store.find_by_email(DEMO_EMAIL) is not None:
            print(f"演示账户已存在: {DEMO_EMAIL}")
            return False

        hasher = PasswordHasher(load_auth_config().bcrypt_rounds)
        account = await store_group.account_store.create_account(
            DEMO_NAME, DEMO_EMAIL, hasher.hash(DEMO_PASSWORD)
        )

        for title, description, status in DEMO_TASKS:
            status = TaskStatus(status)
            await store_group.task_store.create_task(
                owner_id=account.account_id,
                title=title,
                description=description,
                status=status,
                completed_at=datetime.now(UTC) if status == TaskStatus.DONE else None,
            )
        print(f"已写入演示账户 {DEMO_EMAIL} 与 {len(DEMO_TASKS)} 条任务")
        return True
    finally:
        await store_group.close()


if __name__ == "__main__":
    main()
