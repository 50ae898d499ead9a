"""
Utility decorators for views and services.
"""

import logging
import functools
from django.http import Http404
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status

from ..services.exceptions import (
    ConstraintViolationError,
    NotFoundError,
    ValidationException,
)
from .error_handlers import (
    handle_api_error,
    handle_constraint_error,
    handle_not_found_error,
    handle_validation_error,
)


def handle_viewset_errors(operation_name=None):
    """
    Decorator to handle errors consistently in ViewSet methods.

    Maps the planner exception hierarchy onto standardized responses:
    NotFoundError -> 404, ValidationException -> 400,
    ConstraintViolationError -> 400, anything else -> 500.
    DRF's own exceptions (404 from get_object, serializer errors) are
    left to DRF's exception handler.

    Args:
        operation_name: Optional name of the operation for logging.
                       If not provided, uses the function name.

    Usage:
        @action(detail=True, methods=['post'])
        @handle_viewset_errors('finish task')
        def finish(self, request, pk=None):
            ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, request, *args, **kwargs):
            # Get logger from viewset or create new one
            logger_instance = getattr(self, 'logger', logging.getLogger(__name__))

            # Use provided operation name or function name
            op_name = operation_name or func.__name__.replace('_', ' ')

            try:
                return func(self, request, *args, **kwargs)

            except (APIException, Http404):
                raise

            except NotFoundError as e:
                return handle_not_found_error(
                    logger_instance, e.resource_type, resource_id=e.resource_id,
                    operation=op_name
                )

            except ValidationException as e:
                details = {e.field: e.message} if e.field else e.message
                return handle_validation_error(logger_instance, op_name, details)

            except ConstraintViolationError as e:
                return handle_constraint_error(logger_instance, op_name, e)

            except Exception as e:
                context = {
                    'viewset': self.__class__.__name__,
                    'method': getattr(request, 'method', None),
                }
                if kwargs.get('pk') is not None:
                    context['pk'] = kwargs['pk']
                return handle_api_error(logger_instance, op_name, e, **context)

        return wrapper
    return decorator


def require_parameters(*param_names, source='data'):
    """
    Decorator to validate required parameters in request.

    Args:
        *param_names: Names of required parameters
        source: Where to look for parameters ('data', 'query_params', or 'both')

    Returns:
        400 Bad Request if any required parameter is missing

    Usage:
        @action(detail=False, methods=['put'])
        @require_parameters('task_orders')
        def reorder(self, request):
            # task_orders is guaranteed to exist in request.data
            pass
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, request, *args, **kwargs):
            missing = []

            if source in ('data', 'both'):
                for param in param_names:
                    if param not in request.data or request.data[param] is None:
                        missing.append(f"{param} (in body)")

            if source in ('query_params', 'both'):
                for param in param_names:
                    if param not in request.query_params:
                        missing.append(f"{param} (in query params)")

            if missing:
                return Response(
                    {
                        'error': True,
                        'message': 'Missing required parameters',
                        'missing': missing
                    },
                    status=status.HTTP_400_BAD_REQUEST
                )

            return func(self, request, *args, **kwargs)

        return wrapper
    return decorator
