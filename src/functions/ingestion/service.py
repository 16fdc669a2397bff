import csv
import io
from typing import Any, Callable, Dict, Iterator, Optional

from botocore.exceptions import BotoCoreError
from common.decorators import UploadNotification
from common.errors import IngestionError
from common.s3_client import open_object
from common.settings import get_settings
from interface import IngestionSummary
from loguru import logger

Row = Dict[str, Optional[str]]
RowCallback = Callable[[Row], Any]


def log_row(row: Row) -> None:
    logger.info("Parsed row: {}", row)


def stream_rows(body, encoding: str = "utf-8", delimiter: str = ",") -> Iterator[Row]:
    """
    Yields rows of a delimited text stream, header line first. The body is
    read in chunks and never held in memory as a whole.
    """
    text = io.TextIOWrapper(body, encoding=encoding, newline="")
    yield from csv.DictReader(text, delimiter=delimiter)


def ingest_object(
    notification: UploadNotification,
    on_row: RowCallback = log_row,
    s3_client=None,
) -> IngestionSummary:
    settings = get_settings()
    bucket, key = notification.bucket, notification.key

    obj = open_object(bucket, key, client=s3_client)
    logger.info("Streaming s3://{}/{} ({})", bucket, key, obj["content_type"])

    summary = IngestionSummary(bucket=bucket, key=key, content_type=obj["content_type"])
    body = obj["body"]
    try:
        for row in stream_rows(
            body,
            encoding=settings.ingest_encoding,
            delimiter=settings.ingest_delimiter,
        ):
            on_row(row)
            summary.rows += 1
    except (BotoCoreError, csv.Error, UnicodeDecodeError) as e:
        raise IngestionError(bucket, key, str(e)) from e
    finally:
        body.close()

    logger.info("Finished s3://{}/{}: {} rows", bucket, key, summary.rows)
    return summary
