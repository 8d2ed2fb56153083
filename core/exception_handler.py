import structlog
from django.db import IntegrityError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, NotFound
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = structlog.get_logger(__name__)


def custom_exception_handler(exc, context):

    if isinstance(exc, (NotAuthenticated, NotFound, Http404)):
        pass
    elif isinstance(exc, APIException):
        logger.warning("Request rejected", error=str(exc), status_code=exc.status_code)
    else:
        logger.error(exc, exc_info=True)

    # Call REST framework's default exception handler first
    # to get the standard error response.
    response = exception_handler(exc, context)

    # response == None is an exception not handled by the DRF framework in the call above
    if response is None:
        if isinstance(exc, IntegrityError):
            response = Response({"detail": "Database conflict"}, status=status.HTTP_409_CONFLICT)
        else:
            response = Response({"detail": "Internal server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        set_rollback()

    return response
