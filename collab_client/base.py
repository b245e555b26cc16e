"""
Request executor and session state of the API client

The ``BaseClient`` holds the API URL, the transport handle and the current
credentials and provides the single entry point ``do_api_request``, which
executes exactly one request and classifies its outcome. The response body
is released on every path, including the error and not-modified branches.
"""

import logging
from typing import Mapping, Optional, Tuple, Type, TypeVar

import requests

from . import codec, schemas
from .errors import ApplicationError, ClientError, DecodeAmbiguityError, TransportError
from .version import API_URL_SUFFIX


logger = logging.getLogger(__name__)

T = TypeVar("T")

HEADER_REQUEST_ID = "X-Request-ID"
HEADER_VERSION_ID = "X-Version-ID"
HEADER_ETAG_SERVER = "ETag"
HEADER_ETAG_CLIENT = "If-None-Match"
HEADER_AUTH = "Authorization"
HEADER_TOKEN = "Token"

AUTH_TYPE_BEARER = "Bearer"
AUTH_TYPE_TOKEN = "Token"


class Response:
    """
    Metadata of a single API call

    For transport failures, the status code is ``None`` and the error is a
    ``TransportError``. For any status code of 300 or above except 304,
    the error is an ``ApplicationError``. A successful response whose body
    didn't match the expected shape has the ``decode_error`` attribute set,
    which is copied to ``error`` by clients using strict decoding.
    """

    status_code: Optional[int]
    request_id: str
    etag: str
    server_version: str
    error: Optional[ClientError]
    decode_error: Optional[DecodeAmbiguityError]
    headers: Mapping[str, str]

    def __init__(
            self,
            status_code: Optional[int] = None,
            request_id: str = "",
            etag: str = "",
            server_version: str = "",
            error: Optional[ClientError] = None,
            headers: Optional[Mapping[str, str]] = None
    ):
        self.status_code = status_code
        self.request_id = request_id
        self.etag = etag
        self.server_version = server_version
        self.error = error
        self.decode_error = None
        self.headers = headers if headers is not None else {}

    def __repr__(self) -> str:
        return (
            f"Response(status_code={self.status_code!r}, request_id={self.request_id!r}, "
            f"etag={self.etag!r}, error={self.error!r})"
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def not_modified(self) -> bool:
        return self.status_code == 304

    def raise_for_error(self) -> None:
        """
        Raise the error of the call, if there was one

        :raises ClientError: the stored error of the call (one of its subclasses)
        """

        if self.error is not None:
            raise self.error


def build_response(rp: requests.Response) -> Response:
    return Response(
        status_code=rp.status_code,
        request_id=rp.headers.get(HEADER_REQUEST_ID, ""),
        etag=rp.headers.get(HEADER_ETAG_SERVER, ""),
        server_version=rp.headers.get(HEADER_VERSION_ID, ""),
        headers=rp.headers
    )


class BaseClient:
    """
    Base API client holding the transport handle and the current credentials

    A client is meant to represent a single logical session. It doesn't do
    any locking, so logging in and out concurrently with the same instance
    is a mistake of the caller. The transport handle may be shared for
    concurrent reads, though. No request is ever retried automatically.
    """

    url: str
    api_url: str
    http_client: requests.Session
    auth_token: str
    auth_type: str
    timeout: Optional[float]
    strict_decoding: bool

    def __init__(
            self,
            url: str,
            http_client: Optional[requests.Session] = None,
            timeout: Optional[float] = None,
            strict_decoding: bool = False
    ):
        self.url = url.rstrip("/")
        self.api_url = self.url + API_URL_SUFFIX
        self._owns_http_client = http_client is None
        self.http_client = http_client if http_client is not None else requests.Session()
        self.auth_token = ""
        self.auth_type = AUTH_TYPE_BEARER
        self.timeout = timeout
        self.strict_decoding = strict_decoding

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """
        Close the transport handle if it has been created by this client
        """

        if self._owns_http_client:
            self.http_client.close()

    def set_oauth_token(self, token: str) -> None:
        self.auth_token = token
        self.auth_type = AUTH_TYPE_TOKEN

    def clear_oauth_token(self) -> None:
        self._reset_credentials()

    def _reset_credentials(self) -> None:
        self.auth_token = ""
        self.auth_type = AUTH_TYPE_BEARER

    def do_api_get(self, path: str, etag: str = "") -> Tuple[Optional[bytes], Response]:
        return self.do_api_request("GET", path, "", etag)

    def do_api_post(self, path: str, data: str = "") -> Tuple[Optional[bytes], Response]:
        return self.do_api_request("POST", path, data, "")

    def do_api_put(self, path: str, data: str = "") -> Tuple[Optional[bytes], Response]:
        return self.do_api_request("PUT", path, data, "")

    def do_api_delete(self, path: str) -> Tuple[Optional[bytes], Response]:
        return self.do_api_request("DELETE", path, "", "")

    def do_api_request(self, method: str, path: str, data: str = "", etag: str = "") -> Tuple[Optional[bytes], Response]:
        """
        Execute a single request against the API and classify its outcome

        The result is the raw body of a successful response (status code below
        300) or ``None`` for anything else. The response metadata contains the
        error of the call, if any: a ``TransportError`` if no response has been
        received, an ``ApplicationError`` decoded from the body of a failed
        request, or no error for successful and not-modified responses.

        :param method: HTTP method of the request (e.g. ``GET``)
        :param path: route relative to the API URL, including the query string
        :param data: optional JSON payload of the request (never sent with GET)
        :param etag: optional ETag of an earlier response for a conditional request
        :return: tuple of the optional raw response body and the response metadata
        """

        headers = {"Connection": "close", HEADER_AUTH: None}
        if data and method != "GET":
            headers["Content-Type"] = "application/json"
        if etag:
            headers[HEADER_ETAG_CLIENT] = etag
        if self.auth_token:
            headers[HEADER_AUTH] = f"{self.auth_type} {self.auth_token}"

        try:
            rp = self.http_client.request(
                method,
                self.api_url + path,
                data=data.encode("UTF-8") if data and method != "GET" else None,
                headers=headers,
                timeout=self.timeout,
                stream=True
            )
        except requests.RequestException as exc:
            logger.warning(f"{type(exc).__name__} during '{method} {path}': {exc}")
            return None, Response(error=TransportError(path, exc))

        with rp:
            response = build_response(rp)
            logger.debug(f"'{method} {path}' returned {rp.status_code} (request ID {response.request_id!r})")
            if rp.status_code == 304:
                return None, response

            try:
                body = rp.content
            except requests.RequestException as exc:
                logger.warning(f"{type(exc).__name__} while reading the body of '{method} {path}': {exc}")
                response.error = TransportError(path, exc)
                return None, response

            if rp.status_code >= 300:
                response.error = ApplicationError(codec.app_error_from_json(body, rp.status_code), rp.status_code)
                logger.debug(f"'{method} {path}' failed: {response.error}")
                return None, response
            return body, response

    def _typed(self, raw: Optional[bytes], response: Response, target: Type[T], path: str) -> Optional[T]:
        if raw is None or response.error is not None:
            return None
        try:
            return codec.parse(target, raw)
        except ValueError as exc:
            name = getattr(target, "__name__", str(target))
            logger.debug(f"Body of a {response.status_code} response for {path!r} isn't a valid {name}: {exc}")
            response.decode_error = DecodeAmbiguityError(path, name, response.status_code, exc)
            if self.strict_decoding:
                response.error = response.decode_error
            return None

    def _status_ok(self, raw: Optional[bytes], response: Response, path: str) -> bool:
        status = self._typed(raw, response, schemas.StatusOK, path)
        return status is not None and status.status == "OK"
