"""
FastAPI 应用主入口

飞控板维修工单系统的主应用，负责：
1. 创建 FastAPI 应用实例
2. 注册所有路由和全局异常处理
3. 配置 CORS
4. 提供健康检查端点
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException
from repair_workorder_project.app.api.router import api_router
from repair_workorder_project.app.core.config import get_settings
from repair_workorder_project.app.core.exceptions import AppError
from repair_workorder_project.app.core.responses import error_response
import os
import logging

# 配置全局日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# 创建 FastAPI 应用
app = FastAPI(
    title="飞控板维修工单系统",
    description="故障维修工单、7S 管理评估、数据恢复记录管理",
    version="1.0.0",
    docs_url="/docs",      # Swagger 文档地址
    redoc_url="/redoc"     # ReDoc 文档地址
)

# 配置 CORS（允许跨域请求）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 失败: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} 被拒绝({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.message))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == 404:
        message = "接口不存在" if exc.detail == "Not Found" else message
    elif exc.status_code == 405:
        message = "不支持的请求方法"
    return JSONResponse(status_code=exc.status_code, content=error_response(message), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.warning(f"{request.method} {request.url.path} 参数错误: {errors}")
    return JSONResponse(status_code=400, content=error_response("请求参数错误", errors=errors))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} 数据库错误: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_response("数据库操作失败"))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} 未处理的异常: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_response("服务器内部错误"))


# 注册所有 API 路由
app.include_router(api_router)

# 挂载前端静态文件（部署了 web 目录时）
web_dir = get_settings().web_dir
if os.path.isdir(web_dir):
    app.mount("/static", StaticFiles(directory=web_dir, html=True), name="static")


@app.get("/health", tags=["系统"])
async def health_check():
    """
    健康检查端点
    """
    return {
        "status": "ok",
        "message": "系统运行正常"
    }
