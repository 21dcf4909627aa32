"""
blog-service 단위 테스트를 위한 pytest fixtures
"""
import os
import sys
import pytest
import tempfile

# 프로젝트 루트를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from personal_blog.config import ApiConfig, BlogConfig, Config, DatabaseConfig


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """테스트 환경 설정 (SQLite 사용)"""
    os.environ['USE_POSTGRES'] = 'false'
    os.environ['ALLOWED_ORIGINS'] = 'http://localhost:3000'
    yield


@pytest.fixture
def temp_db_path():
    """테스트용 임시 SQLite 데이터베이스 경로"""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = os.path.join(tmpdir, 'test_blog.db')
        os.environ['BLOG_DATABASE_PATH'] = db_path
        yield db_path


@pytest.fixture
def blog_config(temp_db_path):
    """임시 SQLite 파일을 사용하는 서비스 설정"""
    return Config(
        database=DatabaseConfig(use_postgres=False, database_path=temp_db_path, auto_create_schema=True),
        api=ApiConfig(base_path='/api', allowed_origins=['http://localhost:3000'], metrics_enabled=False),
        blog=BlogConfig(default_post_author='Test Author'),
    )


@pytest.fixture
def client(blog_config):
    """lifespan까지 실행되는 TestClient"""
    from fastapi.testclient import TestClient
    from blog_service import create_app

    with TestClient(create_app(blog_config)) as test_client:
        yield test_client


@pytest.fixture
def sample_category():
    """테스트용 카테고리 데이터"""
    return {
        'name': 'Tech',
        'description': 'Posts about software',
        'iconName': 'laptop',
    }


@pytest.fixture
def sample_posts():
    """테스트용 다중 게시물 데이터"""
    return [
        {'title': 'Post 1', 'description': 'Description 1'},
        {'title': 'Post 2', 'description': 'Description 2'},
        {'title': 'Post 3', 'description': 'Description 3'},
    ]
