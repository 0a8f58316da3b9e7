"""Response envelope shared by every API endpoint.

Successful responses look like ``{"success": true, "message": ..., "data": ...}``;
error responses are produced by :mod:`core.exceptions`.
"""

from rest_framework import status
from rest_framework.response import Response


def envelope(data=None, message=None, status_code=status.HTTP_200_OK, headers=None):
    """Wrap ``data`` in the success envelope, omitting empty keys."""
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code, headers=headers)
