"""HTTP entrypoints: the RPC endpoint and file download redirects."""

import json
import logging
from typing import Any

from django.apps import apps
from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError
from django.http import (
    HttpRequest,
    HttpResponse,
    HttpResponseRedirect,
    JsonResponse,
)

from server.apps.api.container import Repositories
from server.apps.api.procedures import router
from server.apps.api.rpc import STATUS_BY_CODE, CallContext, MethodNotSupportedError
from server.apps.circles.infrastructure.metadata import content_disposition
from server.apps.circles.logic.share_operations import register_download
from server.apps.circles.models import File
from server.common.exceptions import BadRequestError, ServiceError

logger = logging.getLogger(__name__)


def _repositories() -> Repositories:
    return apps.get_app_config('api').repositories  # type: ignore[attr-defined]


def _error_response(code: str, message: str) -> JsonResponse:
    return JsonResponse(
        {'error': {'code': code, 'message': message}},
        status=STATUS_BY_CODE[code],
    )


def _read_payload(request: HttpRequest) -> Any:
    """Extract the raw procedure input from the request.

    GET carries JSON in the ``input`` query parameter, POST in the body.

    Raises:
        BadRequestError: If the input is not valid JSON.
    """
    if request.method == 'GET':
        raw = request.GET.get('input')
    else:
        raw = request.body.decode('utf-8') if request.body else None
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as error:
        raise BadRequestError('Invalid JSON input') from error


def rpc_view(request: HttpRequest, procedure: str) -> HttpResponse:
    """Dispatch ``/api/rpc/<procedure>`` to the router.

    Args:
        request: HTTP request; GET for queries, POST for any procedure.
        procedure: Full procedure name (e.g., 'circles.create').

    Returns:
        Success or error envelope as JSON.
    """
    if request.method not in {'GET', 'POST'}:
        return _error_response('METHOD_NOT_SUPPORTED', 'Method not supported')

    user = request.user if request.user.is_authenticated else None
    context = CallContext(user=user, repos=_repositories(), request=request)
    try:
        if request.method == 'GET' and router.get(procedure).kind == 'mutation':
            raise MethodNotSupportedError(
                f'Mutation "{procedure}" requires POST',
            )
        result = router.call(procedure, context, _read_payload(request))
    except ServiceError as error:
        if error.code == 'INTERNAL_SERVER_ERROR':
            logger.error('Procedure %s failed: %s', procedure, error.message)
        return _error_response(error.code, error.message)
    except DatabaseError:
        logger.exception('Database error in procedure %s', procedure)
        return _error_response('INTERNAL_SERVER_ERROR', 'Database not available')
    except Exception:
        logger.exception('Unhandled error in procedure %s', procedure)
        return _error_response('INTERNAL_SERVER_ERROR', 'Internal server error')

    return JsonResponse(
        {'result': {'data': result}},
        encoder=DjangoJSONEncoder,
        safe=False,
    )


def _redirect_to_file(file_instance: File) -> HttpResponseRedirect:
    response = HttpResponseRedirect(file_instance.file_url)
    response['Content-Disposition'] = content_disposition(file_instance.filename)
    response['Content-Type'] = file_instance.mime_type
    return response


def download_file(request: HttpRequest, file_id: int) -> HttpResponse:
    """Redirect to a stored file with attachment headers.

    Args:
        request: HTTP request.
        file_id: File ID.

    Returns:
        302 redirect to the file URL, or 404 JSON.
    """
    file_instance = _repositories().circles.get_file(file_id)
    if file_instance is None:
        return JsonResponse({'error': 'File not found'}, status=404)
    logger.info('Download redirect: file=%d', file_id)
    return _redirect_to_file(file_instance)


def download_shared_file(request: HttpRequest, token: str) -> HttpResponse:
    """Redirect to a shared file and count the download.

    Args:
        request: HTTP request.
        token: Share link token.

    Returns:
        302 redirect to the file URL, or an error envelope.
    """
    try:
        link = register_download(_repositories().circles, token)
    except ServiceError as error:
        return _error_response(error.code, error.message)
    return _redirect_to_file(link.file)
