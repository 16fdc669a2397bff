import uuid
from typing import Any, Dict, List, Optional, Tuple

from common.dynamo_client import get_db_client
from common.errors import AppError, not_found
from common.validation import validate_payload
from interface import ReviewPayload
from loguru import logger

Item = Dict[str, Any]
Result = Tuple[Optional[Item], Optional[AppError]]


def new_review_id() -> str:
    return str(uuid.uuid4())


def fetch_review(review_id: str) -> Result:
    item = get_db_client().get_item(review_id)
    if item is None:
        return None, not_found()
    return item, None


def add_review(payload: Any) -> Result:
    review, err = validate_payload(ReviewPayload, payload)
    if err:
        return None, err

    item = review.to_item(new_review_id())
    get_db_client().put_item(item)
    logger.info("Created review {}", item["reviewId"])
    return item, None


def replace_review(review_id: str, payload: Any) -> Result:
    """
    Overwrites every field of an existing review, keeping its id.

    Not atomic: the existence check and the write are separate calls, so
    concurrent updates of the same id are last-write-wins.
    """
    review, err = validate_payload(ReviewPayload, payload)
    if err:
        return None, err

    item = review.to_item(review_id)
    get_db_client().put_item(item)
    logger.info("Replaced review {}", review_id)
    return item, None


def remove_review(review_id: str) -> None:
    get_db_client().delete_item(review_id)
    logger.info("Deleted review {}", review_id)


def list_all_reviews() -> List[Item]:
    return get_db_client().scan_items()
