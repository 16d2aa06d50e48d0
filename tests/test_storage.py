"""Unit tests for ObjectStorage (boto3-based)."""
import io
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from imgupper.config import Settings
from imgupper.core.exceptions import StorageError
from imgupper.storage.client import ObjectStorage


def _make_client_error(code: str, message: str = "error") -> ClientError:
    return ClientError(
        error_response={"Error": {"Code": code, "Message": message}},
        operation_name="PutObject",
    )


def _prepare_client(mock_boto3) -> MagicMock:
    mock_client = MagicMock(name="S3Client")
    mock_boto3.client.return_value = mock_client
    return mock_client


@patch("imgupper.storage.client.boto3")
def test_from_settings_targets_account_endpoint(mock_boto3):
    _prepare_client(mock_boto3)
    settings = Settings(
        _env_file=None,
        r2_account_id="abc123",
        r2_access_key="access",
        r2_secret_key="secret",
        r2_bucket_name="bucket",
    )

    storage = ObjectStorage.from_settings(settings)

    call_kwargs = mock_boto3.client.call_args.kwargs
    assert call_kwargs["endpoint_url"] == "https://abc123.r2.cloudflarestorage.com"
    assert call_kwargs["aws_access_key_id"] == "access"
    assert call_kwargs["aws_secret_access_key"] == "secret"
    assert call_kwargs["region_name"] == "auto"
    assert storage.bucket_name == "bucket"


@patch("imgupper.storage.client.boto3")
def test_explicit_endpoint_overrides_account(mock_boto3):
    _prepare_client(mock_boto3)
    settings = Settings(_env_file=None, r2_account_id="abc123", r2_endpoint="http://localhost:9000")

    ObjectStorage.from_settings(settings)

    assert mock_boto3.client.call_args.kwargs["endpoint_url"] == "http://localhost:9000"


@pytest.mark.asyncio
@patch("imgupper.storage.client.boto3")
async def test_put_object_public_read(mock_boto3):
    mock_client = _prepare_client(mock_boto3)
    storage = ObjectStorage("bucket", endpoint="http://s3", access_key="a", secret_key="s")
    body = io.BytesIO(b"data")

    await storage.put_object("u/1/uploads/x.png", body, "image/png")

    mock_client.put_object.assert_called_once_with(
        Bucket="bucket",
        Key="u/1/uploads/x.png",
        Body=body,
        ContentType="image/png",
        ACL="public-read",
    )


@pytest.mark.asyncio
@patch("imgupper.storage.client.boto3")
async def test_put_object_private(mock_boto3):
    mock_client = _prepare_client(mock_boto3)
    storage = ObjectStorage("bucket", endpoint="http://s3", access_key="a", secret_key="s")

    await storage.put_object("k", io.BytesIO(b""), "text/plain", public_read=False)

    assert "ACL" not in mock_client.put_object.call_args.kwargs


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [_make_client_error("AccessDenied"), EndpointConnectionError(endpoint_url="http://s3")],
)
@patch("imgupper.storage.client.boto3")
async def test_put_object_failure_raises_storage_error(mock_boto3, error):
    mock_client = _prepare_client(mock_boto3)
    mock_client.put_object.side_effect = error
    storage = ObjectStorage("bucket", endpoint="http://s3", access_key="a", secret_key="s")

    with pytest.raises(StorageError) as exc_info:
        await storage.put_object("k", io.BytesIO(b"x"), "image/png")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "failed to upload file"
    assert exc_info.value.detail
