"""Shared fixtures for storagebox tests."""

from datetime import datetime, timedelta, timezone

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from storagebox.core.config import Settings
from storagebox.main import create_app
from storagebox.models.file import File, FileCategory
from storagebox.services import credentials

BUCKET = 'storagebox-test'
REGION = 'us-east-1'


@pytest.fixture
def settings(tmp_path):
    """Settings for a throwaway SQLite file and a mocked bucket.

    Returns:
        Settings instance that ignores any local .env file.
    """
    return Settings(
        _env_file=None,
        jwt_secret='test-signing-key',
        database_url=f'sqlite:///{tmp_path / "storagebox.db"}',
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
        aws_region=REGION,
        aws_s3_bucket_name=BUCKET,
    )


@pytest.fixture
def s3_client():
    """Mock S3 service with the test bucket.

    Yields:
        boto3 S3 client with the bucket created.
    """
    with mock_aws():
        client = boto3.client(
            's3',
            region_name=REGION,
            aws_access_key_id='testing',
            aws_secret_access_key='testing',
        )
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def app(settings, s3_client):
    """Application wired to the mocked bucket."""
    return create_app(settings, s3_client=s3_client)


@pytest.fixture
def client(app):
    """HTTP client for the application."""
    return TestClient(app)


@pytest.fixture
def db(app):
    """Database session bound to the application's engine.

    Yields:
        SQLAlchemy session, closed after the test.
    """
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def blob_store(app):
    return app.state.blob_store


@pytest.fixture
def user(db):
    """Create test user."""
    return credentials.create_user(db, 'Test User', 'test@example.com', 'testpass123')


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests."""
    return credentials.create_user(db, 'Other User', 'other@example.com', 'testpass123')


@pytest.fixture
def auth_headers(app):
    """Build a Bearer header for a user.

    Returns:
        Callable taking a user and returning request headers.
    """
    def _headers(for_user):
        token = app.state.token_service.issue(for_user.id)
        return {'Authorization': f'Bearer {token}'}

    return _headers


@pytest.fixture
def make_file(db):
    """Insert file metadata directly, bypassing the blob store.

    Returns:
        Callable creating a File row.
    """
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {'n': 0}

    def _make(owner, name='file.bin', category=FileCategory.OTHER, size=100, created_at=None):
        counter['n'] += 1
        file = File(
            owner_id=owner.id,
            name=name,
            url=f'https://example.invalid/{counter["n"]}',
            storage_key=f'{owner.id}/{counter["n"]}_{name}',
            size=size,
            content_type='application/octet-stream',
            category=category.value,
            created_at=created_at or base_time + timedelta(minutes=counter['n']),
        )
        db.add(file)
        db.commit()
        db.refresh(file)
        return file

    return _make
