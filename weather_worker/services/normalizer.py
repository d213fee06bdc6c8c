from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Type, Union

from pydantic import BaseModel, ValidationError

from weather_worker.core.errors import ErrorKind, UpstreamResponseError

HTTP_OK = 200
HTTP_UNAUTHORIZED = 401

GENERIC_MESSAGE = "Bad Request"

DETAILED_MESSAGES = {
    ErrorKind.MALFORMED_UPSTREAM_PAYLOAD: "Malformed upstream payload",
    ErrorKind.UPSTREAM_AUTH_FAILURE: "Upstream rejected the API key",
    ErrorKind.UPSTREAM_OTHER_FAILURE: "Upstream request failed",
}


@dataclass(frozen=True)
class Success:
    payload: BaseModel
    status_code: int = HTTP_OK

    def body(self) -> Dict[str, Any]:
        # Fields the upstream did not send stay absent; explicit nulls are kept.
        return self.payload.model_dump(mode="json", by_alias=True, exclude_unset=True)


@dataclass(frozen=True)
class ClientError:
    """
    Failed classification.

    `message` keeps the generic text for every kind; `kind` carries the
    finer-grained reason for callers that want to surface it.
    """

    status_code: int
    kind: ErrorKind
    upstream_status: int
    message: str = GENERIC_MESSAGE

    @property
    def detailed_message(self) -> str:
        return DETAILED_MESSAGES[self.kind]

    def to_exception(self) -> UpstreamResponseError:
        return self.kind.exception_class(self.upstream_status, self.detailed_message)


NormalizedResponse = Union[Success, ClientError]


def normalize(status: int, body: bytes, schema: Type[BaseModel]) -> NormalizedResponse:
    """
    Classify an upstream (status, body) pair.

    - 200 and a body matching `schema` -> Success
    - 200 and an unparsable / non-matching body -> ClientError(400)
    - 401 -> ClientError(401), body ignored
    - anything else -> ClientError(400), body ignored

    Pure: the same inputs always give the same result.
    """
    if status == HTTP_UNAUTHORIZED:
        return ClientError(HTTP_UNAUTHORIZED, ErrorKind.UPSTREAM_AUTH_FAILURE, status)

    if status != HTTP_OK:
        return ClientError(400, ErrorKind.UPSTREAM_OTHER_FAILURE, status)

    try:
        payload = schema.model_validate_json(body)
    except ValidationError:
        return ClientError(400, ErrorKind.MALFORMED_UPSTREAM_PAYLOAD, status)

    return Success(payload)
