import os

# configure before anything from stash is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"
os.environ["AWS_S3_BUCKET_NAME"] = "stash-test-bucket"
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

import boto3
import pytest
from botocore.config import Config
from fastapi.testclient import TestClient

from stash.api.deps import get_payment_gateway, get_s3_client
from stash.data.database import Base, SessionLocal, engine
from stash.main import app
from tests.helpers import FakeGateway


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def s3_client():
    return boto3.client(
        "s3",
        region_name="eu-west-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )


@pytest.fixture()
def client(gateway, s3_client):
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_s3_client] = lambda: s3_client
    yield TestClient(app)
    app.dependency_overrides.clear()
