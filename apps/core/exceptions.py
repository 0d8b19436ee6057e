"""DRF exception handler that renders framework errors in the API envelope."""

from rest_framework.views import exception_handler

from .responses import envelope


def envelope_exception_handler(exc, context):
    """
    Wrap DRF's default handler so authentication, permission and throttling
    errors share the ``{message, status}`` shape. Unhandled exceptions still
    propagate to Django.
    """
    response = exception_handler(exc, context)
    if response is not None:
        response.data = envelope(response.status_code)
    return response
