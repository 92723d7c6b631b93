"""tasktrack Core -- 领域模型、异常与 SQLite 存储"""
