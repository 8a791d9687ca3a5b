"""
Security utilities - never log or return secrets.
"""

import re
from typing import Any, Dict, Mapping


SENSITIVE_KEYS = (
    'x-auth-token',
    'authorization',
    'access_token',
    'accesstoken',
    'bigcommerce_access_token',
    'contentful_access_token',
    'token',
    'secret',
)


def sanitize_dict_for_logging(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Remove sensitive fields from dict (or header mapping) for logging.

    Args:
        data: Mapping that may contain secrets.

    Returns:
        Sanitized dictionary with secrets replaced.
    """
    result = dict(data)
    for key in list(result.keys()):
        if str(key).lower() in SENSITIVE_KEYS:
            result[key] = '***REDACTED***'

    # Also check nested dicts
    for k, v in result.items():
        if isinstance(v, Mapping):
            result[k] = sanitize_dict_for_logging(v)
        elif isinstance(v, list):
            result[k] = [
                sanitize_dict_for_logging(item) if isinstance(item, Mapping) else item
                for item in v
            ]

    return result


def sanitize_string_for_logging(text: str, secrets: tuple = ()) -> str:
    """
    Remove potential secrets from string (tokens in URLs, auth headers).

    Args:
        text: String that may contain secrets.
        secrets: Known secret values to mask wherever they appear.

    Returns:
        Sanitized string.
    """
    if not text:
        return text

    patterns = [
        (r'(?i)(x-auth-token["\']?\s*[:=]\s*["\']?)[^"\'\s,}]+', r'\1***'),
        (r'(?i)(bearer\s+)[A-Za-z0-9._\-]+', r'\1***'),
        (r'(?i)(access_token=)[^&\s]+', r'\1***'),
    ]

    result = text
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)

    for secret in secrets:
        if secret:
            result = result.replace(secret, '***')

    return result
