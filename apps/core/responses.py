"""
Uniform JSON envelope for API responses.

Every response has the shape ``{data?, message, status}`` where ``message``
is the standard reason phrase for ``status``.
"""

from http import HTTPStatus
from typing import Any

from rest_framework import status
from rest_framework.response import Response


def envelope(status_code: int, data: Any = None) -> dict:
    """Build the envelope body. ``data`` is omitted when None."""
    body = {}
    if data is not None:
        body['data'] = data
    body['message'] = HTTPStatus(status_code).phrase
    body['status'] = status_code
    return body


class APIResponse:
    """
    Shortcuts for enveloped DRF responses.

    Usage:
        return APIResponse.ok({'email': email})
        return APIResponse.conflict()
    """

    @staticmethod
    def build(status_code: int, data: Any = None) -> Response:
        return Response(envelope(status_code, data), status=status_code)

    @staticmethod
    def ok(data: Any = None) -> Response:
        return APIResponse.build(status.HTTP_200_OK, data)

    @staticmethod
    def created(data: Any = None) -> Response:
        return APIResponse.build(status.HTTP_201_CREATED, data)

    @staticmethod
    def bad_request() -> Response:
        return APIResponse.build(status.HTTP_400_BAD_REQUEST)

    @staticmethod
    def unauthorized() -> Response:
        return APIResponse.build(status.HTTP_401_UNAUTHORIZED)

    @staticmethod
    def forbidden() -> Response:
        return APIResponse.build(status.HTTP_403_FORBIDDEN)

    @staticmethod
    def not_found() -> Response:
        return APIResponse.build(status.HTTP_404_NOT_FOUND)

    @staticmethod
    def conflict() -> Response:
        return APIResponse.build(status.HTTP_409_CONFLICT)
