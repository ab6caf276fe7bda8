"""S3クライアントと S3ObjectStore のテスト"""
import boto3
import pytest
from botocore.exceptions import ClientError, ProfileNotFound
from botocore.stub import Stubber

from s3_chunk_uploader.core.object_store import S3ObjectStore
from s3_chunk_uploader.core.s3_client import S3ClientManager
from s3_chunk_uploader.models.config import AWSConfig
from s3_chunk_uploader.models.upload import PartResult


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubbed(s3_client):
    with Stubber(s3_client) as stubber:
        yield S3ObjectStore(s3_client, "media"), stubber
        stubber.assert_no_pending_responses()


class TestS3ObjectStore:
    def test_put_object(self, stubbed):
        store, stubber = stubbed
        stubber.add_response(
            "put_object",
            {"ETag": '"abc"'},
            {
                "Bucket": "media",
                "Key": "a/b/c.txt",
                "CacheControl": "max-age=60",
                "ContentType": "text/plain",
                "Body": b"hello",
            },
        )
        assert store.put_object("a/b/c.txt", "text/plain", "max-age=60", b"hello") == '"abc"'

    def test_multipart_calls(self, stubbed):
        store, stubber = stubbed
        stubber.add_response(
            "create_multipart_upload",
            {"UploadId": "up-1", "Bucket": "media", "Key": "k.bin"},
            {"Bucket": "media", "Key": "k.bin", "CacheControl": "cc",
             "ContentType": "application/octet-stream"},
        )
        stubber.add_response(
            "upload_part",
            {"ETag": '"p1"'},
            {"Bucket": "media", "Key": "k.bin", "PartNumber": 1, "UploadId": "up-1",
             "Body": b"part-one"},
        )
        stubber.add_response(
            "complete_multipart_upload",
            {"ETag": '"final"', "Location": "https://media.s3.amazonaws.com/k.bin",
             "Key": "k.bin", "Bucket": "media"},
            {"Bucket": "media", "Key": "k.bin", "UploadId": "up-1",
             "MultipartUpload": {"Parts": [{"PartNumber": 1, "ETag": '"p1"'}]}},
        )

        upload_id = store.create_multipart_upload("k.bin", "application/octet-stream", "cc")
        etag = store.upload_part("k.bin", upload_id, 1, b"part-one")
        completed = store.complete_multipart_upload("k.bin", upload_id, [PartResult(1, etag)])

        assert upload_id == "up-1"
        assert completed.etag == '"final"'
        assert completed.location == "https://media.s3.amazonaws.com/k.bin"
        assert completed.bucket == "media"

    def test_abort(self, stubbed):
        store, stubber = stubbed
        stubber.add_response(
            "abort_multipart_upload",
            {},
            {"Bucket": "media", "Key": "k.bin", "UploadId": "up-1"},
        )
        store.abort_multipart_upload("k.bin", "up-1")

    def test_client_error_propagates(self, stubbed):
        store, stubber = stubbed
        stubber.add_client_error("upload_part", service_error_code="NoSuchUpload")
        with pytest.raises(ClientError):
            store.upload_part("k.bin", "gone", 3, b"x")


class TestS3ClientManager:
    def test_creates_client_once(self):
        manager = S3ClientManager(AWSConfig(region="eu-central-1", bucket="media"))
        client = manager.get_client()
        assert client is manager.get_client()
        assert client.meta.region_name == "eu-central-1"

    def test_endpoint_url(self):
        manager = S3ClientManager(
            AWSConfig(region="us-east-1", endpoint_url="http://localhost:9000")
        )
        assert manager.get_client().meta.endpoint_url == "http://localhost:9000"

    def test_unknown_profile_raises(self):
        manager = S3ClientManager(AWSConfig(region="us-east-1", profile="no-such-profile-xyz"))
        with pytest.raises(ProfileNotFound):
            manager.get_client()
