from petshop.models import Porte
from petshop.schemas import SchemaErrors, is_integer, require_object, check_string
from petshop.utils.breeds import normalize_breed

DOG_FIELDS = ('nome', 'idade', 'raca', 'porte')
MIN_AGE = 1
MAX_AGE = 20


def validate_dog(data, breed_validator, partial=False):
    """
    Validate a dog payload.

    With ``partial=True`` (updates) absent fields are skipped, but present ones
    go through the same checks. The breed is lower-cased and looked up in the
    registry only when it passed the basic string check.
    """
    data = require_object(data)
    errors = SchemaErrors()
    cleaned = {}

    if not partial or 'nome' in data:
        nome = check_string(data, 'nome', errors, max_length=100, message='Nome do cão é obrigatório.')
        if nome is not None:
            cleaned['nome'] = nome

    if not partial or 'idade' in data:
        idade = data.get('idade')
        if not is_integer(idade):
            errors.add('idade', 'Idade deve ser um número inteiro.')
        elif idade < MIN_AGE:
            errors.add('idade', f'Idade deve ser no mínimo {MIN_AGE}.')
        elif idade > MAX_AGE:
            errors.add('idade', f'Idade máxima permitida é {MAX_AGE} anos.')
        else:
            cleaned['idade'] = idade

    if not partial or 'raca' in data:
        raca = check_string(data, 'raca', errors, max_length=100, message='Raça é obrigatória.')
        if raca is not None:
            raca = normalize_breed(raca)
            if breed_validator.is_known_breed(raca):
                cleaned['raca'] = raca
            else:
                errors.add('raca', f"A raça '{raca}' não foi encontrada na base de dados de raças (dog.ceo).")

    if not partial or 'porte' in data:
        try:
            cleaned['porte'] = Porte(data.get('porte'))
        except ValueError:
            errors.add('porte', "Porte deve ser 'PEQUENO', 'MEDIO', ou 'GRANDE'.")

    errors.raise_if_any()
    return cleaned
