# personal_blog/config.py
import os
import logging
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


@dataclass
class DatabaseConfig:
    """저장소 연결 설정 (SQLite 또는 PostgreSQL)"""
    use_postgres: bool = field(default_factory=lambda: _env_flag('USE_POSTGRES', 'false'))
    host: str = field(default_factory=lambda: os.getenv('POSTGRES_HOST', 'postgresql-service'))
    port: int = field(default_factory=lambda: int(os.getenv('POSTGRES_PORT', '5432')))
    database: str = field(default_factory=lambda: os.getenv('POSTGRES_DB', 'blog'))
    user: str = field(default_factory=lambda: os.getenv('POSTGRES_USER', 'postgres'))
    password: str = field(default_factory=lambda: os.getenv('POSTGRES_PASSWORD', ''))
    ssl_mode: str = field(default_factory=lambda: os.getenv('POSTGRES_SSLMODE', 'disable').lower())
    database_path: str = field(default_factory=lambda: os.getenv('BLOG_DATABASE_PATH', '/app/blog.db'))
    pool_min_size: int = field(default_factory=lambda: int(os.getenv('DB_POOL_MIN_SIZE', '5')))
    pool_max_size: int = field(default_factory=lambda: int(os.getenv('DB_POOL_MAX_SIZE', '20')))
    auto_create_schema: bool = field(default_factory=lambda: _env_flag('AUTO_CREATE_SCHEMA', 'true'))

    @property
    def ssl_enabled(self) -> bool:
        # asyncpg takes an ssl flag, not libpq's sslmode
        return self.ssl_mode not in ('disable', 'false', 'no', '0')

    def asyncpg_params(self) -> dict:
        return {
            'host': self.host,
            'port': self.port,
            'database': self.database,
            'user': self.user,
            'password': self.password,
            'ssl': self.ssl_enabled,
        }

    def sqlalchemy_url(self) -> str:
        """Async SQLAlchemy URL for the configured backend (used by Alembic)."""
        if self.use_postgres:
            return f'postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}'
        return f'sqlite+aiosqlite:///{self.database_path}'


@dataclass
class ApiConfig:
    """HTTP 계층 설정"""
    base_path: str = field(default_factory=lambda: os.getenv('API_BASE_PATH', '/api'))
    allowed_origins: List[str] = field(
        default_factory=lambda: os.getenv('ALLOWED_ORIGINS', '*').split(',')
    )
    metrics_enabled: bool = field(default_factory=lambda: _env_flag('METRICS_ENABLED', 'true'))

    def __post_init__(self):
        self.base_path = '/' + self.base_path.strip('/') if self.base_path.strip('/') else ''


@dataclass
class BlogConfig:
    """게시물 기본값"""
    default_post_author: str = field(default_factory=lambda: os.getenv('DEFAULT_POST_AUTHOR', 'Blog Admin'))


@dataclass
class ServerConfig:
    host: str = '0.0.0.0'
    port: int = field(default_factory=lambda: int(os.getenv('SERVICE_PORT', '8005')))
    log_level: str = field(default_factory=lambda: os.getenv('LOG_LEVEL', 'INFO').upper())


@dataclass
class Config:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    blog: BlogConfig = field(default_factory=BlogConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_config() -> Config:
    """Build a Config from the current environment."""
    config = Config()
    if config.database.use_postgres:
        logger.info("🐘 Using PostgreSQL database for blog data")
    else:
        logger.info("💾 Using SQLite database for blog data")
    return config


# Prometheus Metrics Configuration
REQUEST_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.075,
    0.1,
    0.25,
    0.5,
    0.75,
    1.0,
    2.5,
    5.0,
    10.0,
)
