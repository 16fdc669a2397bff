from common.decorators import ApiRequest, lambda_wrapper
from common.responses import created, no_content, success
from service import (
    add_review,
    fetch_review,
    list_all_reviews,
    remove_review,
    replace_review,
)


@lambda_wrapper
def create_review(request: ApiRequest, context):
    body, err = request.json_body()
    if err:
        return err

    review, err = add_review(body)
    if err:
        return err
    return created(review)


@lambda_wrapper
def get_review(request: ApiRequest, context):
    review_id, err = request.path_param("id")
    if err:
        return err

    review, err = fetch_review(review_id)
    if err:
        return err
    return success(review)


@lambda_wrapper
def update_review(request: ApiRequest, context):
    review_id, err = request.path_param("id")
    if err:
        return err

    # update never creates: the record must exist before the body is looked at
    _, err = fetch_review(review_id)
    if err:
        return err

    body, err = request.json_body()
    if err:
        return err

    review, err = replace_review(review_id, body)
    if err:
        return err
    return success(review)


@lambda_wrapper
def delete_review(request: ApiRequest, context):
    review_id, err = request.path_param("id")
    if err:
        return err

    _, err = fetch_review(review_id)
    if err:
        return err

    remove_review(review_id)
    return no_content()


@lambda_wrapper
def list_reviews(request: ApiRequest, context):
    return success(list_all_reviews())
