import re
from petshop.schemas import SchemaErrors, is_integer, require_object, check_string

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')
CPF_REGEX = re.compile(r'^\d{11}$')
PASSWORD_REGEX = re.compile(r'^.{8,}$')
# DDD + 9 + xxxx-xxxx
TELEFONE_REGEX = re.compile(r'^\(?\d{2}\)?\s?9\d{4}-?\d{4}$')


def _check_profile(data, errors, cleaned, partial):
    if not partial or 'nome' in data:
        nome = check_string(data, 'nome', errors, min_length=2, max_length=100,
                            message='Nome deve ter no mínimo 2 caracteres.')
        if nome is not None:
            cleaned['nome'] = nome

    if not partial or 'email' in data:
        email = data.get('email')
        if not isinstance(email, str) or len(email) > 100 or not EMAIL_REGEX.match(email):
            errors.add('email', 'Formato de e-mail inválido.')
        else:
            cleaned['email'] = email.lower()

    if not partial or 'cpf' in data:
        cpf = data.get('cpf')
        if not isinstance(cpf, str) or not CPF_REGEX.match(cpf):
            errors.add('cpf', 'CPF deve conter exatamente 11 dígitos.')
        else:
            cleaned['cpf'] = cpf

    if not partial or 'idade' in data:
        idade = data.get('idade')
        if not is_integer(idade) or idade <= 0:
            errors.add('idade', 'Idade deve ser um número inteiro positivo.')
        else:
            cleaned['idade'] = idade

    # telefone is always optional
    if 'telefone' in data:
        telefone = data.get('telefone')
        if not isinstance(telefone, str) or not TELEFONE_REGEX.match(telefone):
            errors.add('telefone', 'Formato de telefone inválido. Use o padrão BR: (XX) 9XXXX-XXXX.')
        else:
            cleaned['telefone'] = telefone


def validate_register(data):
    data = require_object(data)
    errors = SchemaErrors()
    cleaned = {}
    _check_profile(data, errors, cleaned, partial=False)

    password = data.get('password')
    if not isinstance(password, str) or not PASSWORD_REGEX.match(password):
        errors.add('password', 'Senha deve ter no mínimo 8 caracteres.')
    else:
        cleaned['password'] = password

    errors.raise_if_any()
    return cleaned


def validate_login(data):
    data = require_object(data)
    errors = SchemaErrors()
    identifier = check_string(data, 'identifier', errors, message='E-mail ou CPF é obrigatório.')
    password = data.get('password')
    if not isinstance(password, str) or not password:
        errors.add('password', 'Senha é obrigatória.')
    errors.raise_if_any()
    return {'identifier': identifier, 'password': password}


def validate_user_update(data):
    data = require_object(data)
    errors = SchemaErrors()
    cleaned = {}
    _check_profile(data, errors, cleaned, partial=True)
    errors.raise_if_any()
    return cleaned
