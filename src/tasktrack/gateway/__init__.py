"""tasktrack Gateway -- FastAPI 应用、路由与业务服务"""
