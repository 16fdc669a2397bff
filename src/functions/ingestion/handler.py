from common.decorators import UploadNotification, s3_event_wrapper
from service import ingest_object


@s3_event_wrapper
def lambda_handler(notification: UploadNotification, context):
    return ingest_object(notification).model_dump()
