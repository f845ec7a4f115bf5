import os

# 设置测试环境
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from blog.main import app
from blog.db.database import Base, get_session, SQLITE_TEST_DB
from blog.models.user import User

# 测试数据库配置
test_engine = create_engine(SQLITE_TEST_DB, connect_args={"check_same_thread": False})
TestSessionLocal = sessionmaker(bind=test_engine, autoflush=False)

@pytest.fixture(autouse=True)
def clean_db():
    """清理并重建测试数据库"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)

@pytest.fixture
def session(clean_db):
    """直接操作数据库的会话"""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture
def user(session):
    """数据库中的一个用户"""
    db_user = User(username="author", email="author@example.com", password_hash="x")
    session.add(db_user)
    session.commit()
    return db_user

@pytest.fixture
def client(clean_db):
    """创建测试客户端"""
    test_session = TestSessionLocal()

    def override_get_session():
        try:
            yield test_session
        finally:
            test_session.close()

    app.dependency_overrides[get_session] = override_get_session

    client = TestClient(app)
    yield client

    test_session.close()
    app.dependency_overrides.clear()

@pytest.fixture
def test_user_data():
    return {
        "username": "testuser",
        "email": "test@example.com",
        "password": "testpassword123",
        "bio": "Test user bio"
    }

@pytest.fixture
def login_as(client):
    """注册并登录一个用户，返回带认证头的客户端"""
    def _login_as(user_data):
        client.post("/api/users/register", json=user_data)
        login_response = client.post("/api/users/login", json={
            "username": user_data["username"],
            "password": user_data["password"]
        })
        token = login_response.json()["access_token"]
        auth_client = TestClient(client.app)
        auth_client.headers = {"Authorization": f"Bearer {token}"}
        return auth_client
    return _login_as

@pytest.fixture
def authenticated_client(login_as, test_user_data):
    """返回一个已认证的客户端"""
    return login_as(test_user_data)

@pytest.fixture
def other_client(login_as):
    """另一个已认证用户的客户端"""
    return login_as({
        "username": "otheruser",
        "email": "other@example.com",
        "password": "otherpassword123",
        "bio": "Other user bio"
    })

@pytest.fixture
def test_post_data():
    return {
        "title": "Test Post",
        "body": "This is a test post body"
    }
