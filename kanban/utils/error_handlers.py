"""
Error Handling Utilities
Standardized error handling and logging for API endpoints
"""
from rest_framework import status
from rest_framework.response import Response


def _context_suffix(context):
    if not context:
        return ''
    return ' (' + ', '.join(f"{k}={v}" for k, v in context.items()) + ')'


def handle_api_error(logger, operation, error, **context):
    """
    Standardized error handling for API endpoints.

    Args:
        logger: Logger instance for this module
        operation: Description of the operation that failed (e.g., "move task")
        error: The exception that was raised
        **context: Additional context (project_id, task_id, etc.)

    Returns:
        Response: DRF Response object with error details

    Example:
        try:
            service.move(task.id, column.id, index)
        except Exception as e:
            return handle_api_error(logger, 'move task', e, task_id=task.id)
    """
    error_msg = str(error)

    # Log with full traceback
    logger.error(
        f"{operation.capitalize()} failed{_context_suffix(context)}: {error_msg}",
        exc_info=True
    )

    response_data = {
        'error': True,
        'message': f'Failed to {operation}',
        'operation': operation,
    }

    # Include ids only; request payloads stay in the log
    for key in ('project_id', 'column_id', 'task_id', 'post_id'):
        if key in context:
            response_data[key] = context[key]

    return Response(
        response_data,
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def handle_validation_error(logger, operation, error_details, **context):
    """
    Standardized handling for validation errors.

    Args:
        logger: Logger instance
        operation: Description of the operation
        error_details: Dict or string describing validation errors
        **context: Additional context

    Returns:
        Response: DRF Response with 400 status

    Example:
        if not name.strip():
            return handle_validation_error(
                logger,
                'create column',
                {'name': 'Column name is required'}
            )
    """
    # Log validation error (not as severe as exceptions)
    logger.warning(f"Validation error in {operation}{_context_suffix(context)}: {error_details}")

    return Response(
        {
            'error': True,
            'message': f'Validation error in {operation}',
            'details': error_details,
            'operation': operation,
        },
        status=status.HTTP_400_BAD_REQUEST
    )


def handle_constraint_error(logger, operation, error, **context):
    """
    Standardized handling for structural rule violations
    (e.g. deleting the last column of a project).

    Returns:
        Response: DRF Response with 400 status
    """
    logger.info(f"Constraint violation in {operation}{_context_suffix(context)}: {error}")

    return Response(
        {
            'error': True,
            'message': str(error),
            'details': getattr(error, 'details', {}),
            'operation': operation,
        },
        status=status.HTTP_400_BAD_REQUEST
    )


def handle_not_found_error(logger, resource_type, resource_id=None, **context):
    """
    Standardized handling for resource not found errors.

    Args:
        logger: Logger instance
        resource_type: Type of resource (e.g., 'project', 'column', 'task')
        resource_id: ID of the resource (optional)
        **context: Additional context

    Returns:
        Response: DRF Response with 404 status

    Example:
        column = Column.objects.filter(id=column_id, project__author=user).first()
        if not column:
            return handle_not_found_error(logger, 'column', resource_id=column_id)
    """
    log_msg = f"{resource_type.capitalize()} not found"
    if resource_id is not None:
        log_msg += f" (id={resource_id})"
    if context:
        context_str = ', '.join(f"{k}={v}" for k, v in context.items())
        log_msg += f" [{context_str}]"

    logger.info(log_msg)

    response_data = {
        'error': True,
        'message': f'{resource_type.capitalize()} not found',
        'resource_type': resource_type,
    }

    if resource_id is not None:
        response_data['resource_id'] = resource_id

    return Response(
        response_data,
        status=status.HTTP_404_NOT_FOUND
    )
