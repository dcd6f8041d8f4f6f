"""
Configuration for the shared telemetry stack.

Follows steering rule: "Read once at startup, validate env vars on boot".
Nothing here is required by the validators themselves; only the logger and
metrics client consult it.
"""

import os
from typing import Dict, Any, Mapping, Optional


DEFAULT_METRICS_NAMESPACE = 'UserManagement'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Environment variable {name} must be a boolean, got {value!r}"
    )


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Load and validate configuration from environment variables.
    
    Recognized variables:
    - USERS_METRICS_ENABLED: publish CloudWatch metrics (default: false)
    - USERS_METRICS_NAMESPACE: CloudWatch namespace (default: UserManagement)
    
    Args:
        environ: Mapping to read from (defaults to os.environ)
        
    Returns:
        Configuration dictionary with snake_case keys
        
    Raises:
        ValueError: If a variable holds an invalid value
    """
    if environ is None:
        environ = os.environ
    
    metrics_enabled = _parse_bool(
        'USERS_METRICS_ENABLED',
        environ.get('USERS_METRICS_ENABLED', 'false')
    )
    
    namespace = environ.get('USERS_METRICS_NAMESPACE', DEFAULT_METRICS_NAMESPACE).strip()
    if not namespace:
        raise ValueError('USERS_METRICS_NAMESPACE cannot be empty')
    
    return {
        'metrics_enabled': metrics_enabled,
        'metrics_namespace': namespace
    }
