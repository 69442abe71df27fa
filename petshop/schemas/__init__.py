import math
from petshop.errors import ValidationError


class SchemaErrors:
    """Collects every problem in a payload so the client sees them all at once."""

    def __init__(self):
        self.items = []

    def add(self, path, message):
        if not isinstance(path, list):
            path = [path]
        self.items.append({'path': path, 'message': message})

    def __bool__(self):
        return bool(self.items)

    def raise_if_any(self):
        if self.items:
            raise ValidationError(self.items)


def require_object(data):
    if not isinstance(data, dict):
        raise ValidationError([{'path': [], 'message': 'O corpo da requisição deve ser um objeto JSON.'}])
    return data


def is_integer(value):
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value):
    # NaN and Infinity are valid JSON tokens for Flask, not valid numbers here
    if isinstance(value, float):
        return math.isfinite(value)
    return is_integer(value)


def check_string(data, key, errors, min_length=1, max_length=None, message=None):
    value = data.get(key)
    if not isinstance(value, str) or len(value.strip()) < min_length:
        errors.add(key, message or f"'{key}' deve ter no mínimo {min_length} caractere(s).")
        return None
    if max_length is not None and len(value) > max_length:
        errors.add(key, f"'{key}' deve ter no máximo {max_length} caracteres.")
        return None
    return value.strip()
