from datetime import date, datetime, timezone

from flask import request

from skillswap.errors import ValidationFailure


def get_json_body():
    """Return the JSON request body as a dict, rejecting anything else."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationFailure('Request body must be a JSON object')
    return data


def require_str(data, field, max_length=None):
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailure(f'{field} is required', field)
    if max_length and len(value) > max_length:
        raise ValidationFailure(f'{field} must be at most {max_length} characters', field)
    return value


def optional_str(data, field, max_length=None):
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFailure(f'{field} must be a string', field)
    if max_length and len(value) > max_length:
        raise ValidationFailure(f'{field} must be at most {max_length} characters', field)
    return value


def optional_int(data, field):
    value = data.get(field)
    if value is None or value == '':
        return None
    # bool is an int subclass; true/false is never a valid id or count
    if isinstance(value, bool):
        raise ValidationFailure(f'{field} must be an integer', field)
    if isinstance(value, float) and not value.is_integer():
        raise ValidationFailure(f'{field} must be an integer', field)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationFailure(f'{field} must be an integer', field)


def require_int(data, field):
    value = optional_int(data, field)
    if value is None:
        raise ValidationFailure(f'{field} is required', field)
    return value


def optional_number(data, field):
    value = data.get(field)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationFailure(f'{field} must be a number', field)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationFailure(f'{field} must be a number', field)


def optional_bool(data, field, default=False):
    value = data.get(field)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', '1', 'yes'):
        return True
    if isinstance(value, str) and value.lower() in ('false', '0', 'no'):
        return False
    raise ValidationFailure(f'{field} must be a boolean', field)


def parse_enum(enum_cls, value, field):
    """Map a raw string onto a closed enumeration, rejecting unknown values."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationFailure(f'{field} must be one of: {allowed}', field)


def optional_datetime(data, field):
    value = data.get(field)
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        raise ValidationFailure(f'{field} must be an ISO-8601 timestamp', field)
    # Stored as naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def optional_date(data, field):
    value = data.get(field)
    if value is None:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationFailure(f'{field} must be an ISO-8601 date (YYYY-MM-DD)', field)
