"""
Shared fixtures.

Lambda functions are deployed as flat directories (``handler``, ``service``,
``interface``) on top of the common layer, so each function is imported here
the same way the runtime does it: its directory first on ``sys.path`` and the
layer's ``python`` directory behind it.
"""
import importlib
import io
import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError
from botocore.response import StreamingBody

ROOT = Path(__file__).resolve().parent.parent
LAYER_PATH = ROOT / "src" / "layers" / "common_layer" / "python"
FUNCTIONS_PATH = ROOT / "src" / "functions"

if str(LAYER_PATH) not in sys.path:
    sys.path.insert(0, str(LAYER_PATH))

FUNCTION_MODULES = ("interface", "service", "handler")


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table keyed by one attribute."""

    def __init__(self, key_name="reviewId", page_size=None):
        self.key_name = key_name
        self.page_size = page_size
        self.items = {}
        self.calls = []

    def put_item(self, Item):
        self.calls.append(("put_item", Item))
        self.items[Item[self.key_name]] = dict(Item)
        return {}

    def get_item(self, Key, **kwargs):
        self.calls.append(("get_item", Key))
        item = self.items.get(Key[self.key_name])
        return {"Item": dict(item)} if item is not None else {}

    def delete_item(self, Key):
        self.calls.append(("delete_item", Key))
        self.items.pop(Key[self.key_name], None)
        return {}

    def scan(self, **kwargs):
        self.calls.append(("scan", kwargs))
        keys = list(self.items)
        start = 0
        if "ExclusiveStartKey" in kwargs:
            start = keys.index(kwargs["ExclusiveStartKey"][self.key_name]) + 1
        end = len(keys) if self.page_size is None else start + self.page_size
        page = [dict(self.items[k]) for k in keys[start:end]]
        response = {"Items": page, "Count": len(page)}
        if end < len(keys):
            response["LastEvaluatedKey"] = {self.key_name: keys[end - 1]}
        return response

    def writes(self):
        return [c for c in self.calls if c[0] in ("put_item", "delete_item")]


class FakeS3:
    def __init__(self):
        self.objects = {}

    def add(self, bucket, key, data: bytes, content_type="text/csv"):
        self.objects[(bucket, key)] = (data, content_type)

    def get_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "Not Found"}}, "GetObject"
            )
        data, content_type = self.objects[(Bucket, Key)]
        return {
            "ContentType": content_type,
            "ContentLength": len(data),
            "Body": StreamingBody(io.BytesIO(data), len(data)),
        }


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("TABLE_NAME", "ReviewsTable")
    for name in ("AWS_REGION", "LOG_LEVEL", "LOG_JSON", "INGEST_DELIMITER", "INGEST_ENCODING"):
        monkeypatch.delenv(name, raising=False)

    from common.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def load_function(monkeypatch):
    """Imports a function directory's modules as the Lambda runtime would."""

    def _load(name):
        for module in FUNCTION_MODULES:
            monkeypatch.delitem(sys.modules, module, raising=False)
        monkeypatch.syspath_prepend(str(FUNCTIONS_PATH / name))
        return SimpleNamespace(
            **{module: importlib.import_module(module) for module in FUNCTION_MODULES}
        )

    return _load


@pytest.fixture
def fake_table():
    return FakeTable()


@pytest.fixture
def table_factory():
    return FakeTable


@pytest.fixture
def reviews(load_function, fake_table, monkeypatch):
    from common.dynamo_client import DynamoClient

    fn = load_function("reviews")
    client = DynamoClient(table=fake_table)
    monkeypatch.setattr(fn.service, "get_db_client", lambda: client)
    fn.table = fake_table
    return fn


@pytest.fixture
def fake_s3(monkeypatch):
    import common.s3_client

    s3 = FakeS3()
    monkeypatch.setattr(common.s3_client, "get_s3_client", lambda: s3)
    return s3


@pytest.fixture
def ingestion(load_function, fake_s3):
    fn = load_function("ingestion")
    fn.s3 = fake_s3
    return fn


@pytest.fixture
def lambda_context():
    return SimpleNamespace(aws_request_id="req-1234", function_name="test")


@pytest.fixture
def api_event():
    def _event(body=None, review_id=None, is_base64=False):
        event = {"body": body, "isBase64Encoded": is_base64}
        if review_id is not None:
            event["pathParameters"] = {"id": review_id}
        return event

    return _event


@pytest.fixture
def s3_event():
    def _event(*objects):
        return {
            "Records": [
                {
                    "eventSource": "aws:s3",
                    "eventName": "ObjectCreated:Put",
                    "s3": {
                        "bucket": {"name": bucket},
                        "object": {"key": key, "size": 10},
                    },
                }
                for bucket, key in objects
            ]
        }

    return _event

