from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
import logging
import os
from typing import Optional
from functools import lru_cache

# 数据库配置
SQLITE_DEV_DB = "sqlite:///./dev.db"
SQLITE_TEST_DB = "sqlite:///./test.db"
SQLITE_PROD_DB = "sqlite:///./prod.db"

logger = logging.getLogger(__name__)

Base = declarative_base()

def get_database_url() -> str:
    """根据 APP_ENV 选择数据库地址"""
    env = os.getenv("APP_ENV", "development")
    if env == "test":
        return SQLITE_TEST_DB
    if env == "production":
        return os.getenv("DATABASE_URL", SQLITE_PROD_DB)
    return SQLITE_DEV_DB

@lru_cache()
def get_engine():
    """获取数据库引擎"""
    database_url = get_database_url()
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)

def get_session_maker():
    """获取会话工厂"""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

def get_session():
    """获取数据库会话"""
    SessionLocal = get_session_maker()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

def create_tables(db_engine: Optional[object] = None):
    """创建所有表

    Args:
        db_engine: 可选的数据库引擎，如果不提供则使用默认引擎
    """
    engine = db_engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready on %s", engine.url.render_as_string(hide_password=True))
