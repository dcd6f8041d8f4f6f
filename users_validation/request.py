"""
Request glue for handlers of the user resource.

Pulls the raw values out of an API Gateway proxy event, runs the validators
and, on failure, logs the errors and builds the 400 response. Handlers keep
their own routing, authorization and persistence.
"""

import json
from typing import Any, Dict, Optional, Tuple

from users_shared.logger import StructuredLogger
from users_shared.responses import create_validation_error_response
from users_shared.types import IdParam, UserUpdate

from .validation import ValidationResult, validate_id_param, validate_user_update


def _reject(
    result: ValidationResult,
    logger: StructuredLogger,
    message: str
) -> Dict[str, Any]:
    logger.log_validation_error(errors=result.errors)
    return create_validation_error_response(result.errors, message)


def validate_id_path_parameter(
    event: Dict[str, Any],
    logger: StructuredLogger,
    parameter: str = 'id'
) -> Tuple[Optional[IdParam], Optional[Dict[str, Any]]]:
    """
    Validate the user ID taken from the event's path parameters.
    
    Args:
        event: API Gateway Lambda proxy integration event
        logger: Request logger
        parameter: Name of the path parameter holding the ID
        
    Returns:
        (IdParam, None) on success, (None, error response) on failure
    """
    path_parameters = event.get('pathParameters') or {}
    result = validate_id_param({'id': path_parameters.get(parameter)})
    
    if not result.ok:
        return None, _reject(result, logger, 'Invalid path parameters')
    
    return result.value, None


def validate_update_body(
    event: Dict[str, Any],
    logger: StructuredLogger
) -> Tuple[Optional[UserUpdate], Optional[Dict[str, Any]]]:
    """
    Decode and validate the user update body of the event.
    
    A string body is parsed as JSON; an already-decoded body is used as is;
    a missing body counts as an empty object.
    
    Args:
        event: API Gateway Lambda proxy integration event
        logger: Request logger
        
    Returns:
        (UserUpdate, None) on success, (None, error response) on failure
    """
    body = event.get('body')
    if body is None:
        body = '{}'
    
    if isinstance(body, str):
        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            result = ValidationResult.failure([{
                'field': 'body',
                'code': 'TYPE_MISMATCH',
                'message': 'Request body must be valid JSON'
            }])
            return None, _reject(result, logger, 'Invalid JSON in request body')
    else:
        payload = body
    
    result = validate_user_update(payload)
    if not result.ok:
        return None, _reject(result, logger, 'Invalid request data')
    
    logger.log_info(message='update_validated', fields=sorted(result.value))
    return result.value, None
