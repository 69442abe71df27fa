from petshop.schemas import SchemaErrors, is_number, require_object, check_string

MIN_PRICE = 0.01


def _as_price(value):
    if not is_number(value):
        return None
    try:
        return float(value)
    except OverflowError:
        return None


def validate_service(data, partial=False):
    data = require_object(data)
    errors = SchemaErrors()
    cleaned = {}

    if not partial or 'name' in data:
        name = check_string(data, 'name', errors, min_length=2, max_length=100,
                            message='Nome do serviço é obrigatório.')
        if name is not None:
            cleaned['name'] = name

    if not partial or 'price' in data:
        price = _as_price(data.get('price'))
        if price is None or price < MIN_PRICE:
            errors.add('price', 'Preço deve ser um número positivo.')
        else:
            cleaned['price'] = price

    errors.raise_if_any()
    return cleaned
