"""
配置管理模块

负责读取数据库连接配置（mysql.ini）和系统状态配置（app-config.ini）。
环境变量（可放在 .env 中）优先于配置文件。
"""
import configparser
import logging
import os
from datetime import datetime
from functools import lru_cache
from typing import Dict
from urllib.parse import quote_plus

from dotenv import load_dotenv

from repair_workorder_project.app.core.exceptions import ConfigError

# 加载 env
load_dotenv()

logger = logging.getLogger(__name__)

# 项目根目录（repair_workorder_project）
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DEFAULT_MYSQL_PORT = 3306
DEFAULT_CHARSET = "utf8mb4"


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name, "").strip()
    try:
        value = int(raw) if raw else default
    except ValueError:
        logger.warning(f"环境变量 {name}={raw!r} 不是整数，使用默认值 {default}")
        value = default
    return max(minimum, value)


def _strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


class AppConfig:
    """应用配置管理类"""

    def __init__(self):
        self.config_dir = os.getenv("WORKORDER_CONFIG_DIR") or os.path.join(BASE_DIR, "config")
        self.data_dir = os.getenv("WORKORDER_DATA_DIR") or os.path.join(BASE_DIR, "data")

        self.mysql_ini_path = os.path.join(self.config_dir, "mysql.ini")
        self.app_config_path = os.path.join(self.config_dir, "app-config.ini")
        self.headers_path = os.path.join(self.data_dir, "headers.json")
        self.web_dir = os.path.join(BASE_DIR, "web")

        # 会话签名密钥，为空时在 security 模块中按进程随机生成
        self.session_secret = os.getenv("WORKORDER_SESSION_SECRET", "").strip()
        self.session_ttl_seconds = _int_env("WORKORDER_SESSION_TTL_SECONDS", 43200, minimum=300)

        # 初始化数据库时创建的默认管理员密码
        self.admin_password = os.getenv("WORKORDER_ADMIN_PASSWORD", "admin123")

    def load_database_section(self) -> Dict[str, str]:
        """
        读取 mysql.ini 的 [database] 配置段

        文件不存在时返回空字典。
        """
        if not os.path.exists(self.mysql_ini_path):
            return {}

        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(self.mysql_ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(f"无法解析配置文件 mysql.ini: {e}")

        if not parser.has_section("database"):
            raise ConfigError("配置文件 mysql.ini 缺少 [database] 配置段")

        return {key: _strip_quotes(value) for key, value in parser.items("database")}

    @property
    def database_url(self) -> str:
        """
        数据库连接地址

        优先级：环境变量 DATABASE_URL > mysql.ini 中的 url > mysql.ini 中的主机/账号配置 > 本地 SQLite。
        """
        env_url = os.getenv("DATABASE_URL", "").strip()
        if env_url:
            return env_url

        section = self.load_database_section()
        if not section:
            sqlite_path = os.path.join(self.data_dir, "workorder.db")
            logger.warning(f"未找到配置文件 {self.mysql_ini_path}，使用本地 SQLite: {sqlite_path}")
            return f"sqlite:///{sqlite_path}"

        if section.get("url"):
            return section["url"]

        missing = [key for key in ("host", "user", "database") if not section.get(key)]
        if missing:
            raise ConfigError(f"配置文件 mysql.ini 缺少字段: {', '.join(missing)}")

        port = section.get("port") or DEFAULT_MYSQL_PORT
        charset = section.get("charset") or DEFAULT_CHARSET
        password = quote_plus(section.get("password", ""))
        return (
            f"mysql+pymysql://{section['user']}:{password}@{section['host']}:{port}"
            f"/{section['database']}?charset={charset}"
        )

    def init_directories(self):
        """初始化配置和数据目录"""
        for directory in (self.config_dir, self.data_dir):
            os.makedirs(directory, exist_ok=True)


@lru_cache()
def get_settings() -> AppConfig:
    """获取应用配置（单例）"""
    settings = AppConfig()
    settings.init_directories()
    return settings


class ConfigManager:
    """
    系统状态配置管理器

    app-config.ini 只记录数据库是否已初始化。每次实例化都重新读取文件。
    """

    SECTION = "database"
    KEY_INITIALIZED = "initialized"

    def __init__(self, config_path: str):
        self.config_path = config_path
        self._parser = self._load()

    def _load(self) -> configparser.ConfigParser:
        if not os.path.exists(self.config_path):
            self._write(initialized=False)

        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(self.config_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(f"配置文件格式错误或无法读取: {e}")
        return parser

    def _write(self, initialized: bool):
        os.makedirs(os.path.dirname(self.config_path) or ".", exist_ok=True)
        lines = [
            "; 飞控板维修工单系统配置文件",
            "; 只记录数据库初始化状态",
            f"; 最后更新：{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            f"[{self.SECTION}]",
            "; 数据库是否已初始化 (true/false)",
            f"{self.KEY_INITIALIZED} = {'true' if initialized else 'false'}",
            "",
        ]
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines))

    def is_database_initialized(self) -> bool:
        """获取数据库初始化状态"""
        value = self._parser.get(self.SECTION, self.KEY_INITIALIZED, fallback="false")
        return parse_bool(value)

    def set_database_initialized(self, initialized: bool = True) -> bool:
        """设置数据库初始化状态"""
        try:
            self._write(initialized=initialized)
        except OSError as e:
            logger.error(f"写入配置文件失败: {self.config_path}, {e}", exc_info=True)
            return False
        self._parser = self._load()
        logger.info(f"数据库初始化状态已更新为: {initialized}")
        return True

    def get_all(self) -> Dict[str, Dict[str, str]]:
        """获取所有配置"""
        return {section: dict(self._parser.items(section)) for section in self._parser.sections()}


def get_config_manager() -> ConfigManager:
    """获取系统状态配置管理器"""
    return ConfigManager(get_settings().app_config_path)
