"""
Helpers for reading query string parameters in views.
"""
from rest_framework.exceptions import ValidationError


def int_param(request, name, default, minimum=None, maximum=None):
    """
    Read an integer query parameter, clamped to ``maximum``.

    Raises ``ValidationError`` when the value is not an integer or is below
    ``minimum``.
    """
    raw = request.query_params.get(name)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: ['A valid integer is required.']})
    if minimum is not None and value < minimum:
        raise ValidationError({name: [f'Ensure this value is greater than or equal to {minimum}.']})
    if maximum is not None:
        value = min(value, maximum)
    return value


def choice_param(request, name, choices, default):
    """Return the parameter if it is one of *choices*, otherwise *default*."""
    value = request.query_params.get(name)
    return value if value in choices else default
