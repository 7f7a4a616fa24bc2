# Test configuration

import io
import os
import sys
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from objectfs.storage.backend import ObjectStoreClient  # noqa: E402
from tests.consts import TEST_BUCKET_NAME, TEST_REGION  # noqa: E402


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)


@pytest.fixture
def mocked_aws(aws_credentials):
    """Run the test against moto's in-memory AWS."""
    with mock_aws():
        yield


@pytest.fixture
def s3_client(mocked_aws):
    """boto3 S3 client talking to moto."""
    return boto3.client("s3", region_name=TEST_REGION)


@pytest.fixture
def existing_bucket(s3_client):
    """Create the test bucket and return its name."""
    s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
    return TEST_BUCKET_NAME


@pytest.fixture
def service():
    """Mocked object-store client for adapter unit tests."""
    service = MagicMock(spec=ObjectStoreClient)
    service.region = TEST_REGION
    service.does_bucket_exist.return_value = True
    service.get_object.return_value = {
        "Body": io.BytesIO(b"stored content"),
        "ContentType": "text/plain",
    }
    return service
