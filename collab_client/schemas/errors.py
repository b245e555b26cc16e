"""
Collab client error schemas
"""

from typing import Optional

import pydantic


__all__ = ["AppError", "StatusOK"]


class AppError(pydantic.BaseModel):
    """
    AppError: shared model for all types of API failures

    Whenever a request fails on the server side, the response body contains
    an instance of this model. The field `id` is a stable identifier of the
    failure (e.g. `api.user.login.invalid_credentials`) and the only field
    that's safe for programmatic branching. The field `message` contains a
    human-readable, possibly translated message, while `detailed_error`
    holds additional details for debugging (some servers name this field
    `detail_message`, which is accepted as well). The field `request_id`
    echoes the correlation ID of the failed request and `status_code` the
    HTTP status code of the response, if the server filled it in.
    """

    model_config = pydantic.ConfigDict(populate_by_name=True)

    id: str = ""
    message: str = ""
    detailed_error: str = pydantic.Field(
        default="",
        validation_alias=pydantic.AliasChoices("detailed_error", "detail_message")
    )
    request_id: str = ""
    status_code: Optional[int] = None
    is_oauth: bool = False


class StatusOK(pydantic.BaseModel):
    status: str = ""
