import logging
from flask import current_app
from petshop import api

logger = logging.getLogger(__name__)


class PetshopError(Exception):
    code = 500
    message = 'Erro interno do servidor.'

    def __init__(self, message=None, code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if code:
            self.code = code

    def to_dict(self):
        return {'message': self.message}


class ValidationError(PetshopError):
    code = 400
    message = 'Erro de validação de dados.'

    def __init__(self, errors, message=None):
        super().__init__(message)
        self.errors = errors

    def to_dict(self):
        return {'message': self.message, 'errors': self.errors}


class InvalidReferenceError(PetshopError):
    code = 400
    message = 'Um ou mais IDs são inválidos.'

    def __init__(self, invalid_ids=(), message=None):
        super().__init__(message)
        self.invalid_ids = sorted(invalid_ids)

    def to_dict(self):
        return {'message': self.message, 'invalidIds': self.invalid_ids}


class InvalidDogReferenceError(InvalidReferenceError):
    message = 'Um ou mais IDs de cachorro são inválidos ou não pertencem a você.'


class InvalidServiceReferenceError(InvalidReferenceError):
    message = 'Um ou mais IDs de serviço são inválidos.'


class NotFoundError(PetshopError):
    code = 404
    message = 'Recurso não encontrado.'


class ForbiddenError(PetshopError):
    code = 403
    message = 'Você não tem permissão para esta operação.'


class ConflictError(PetshopError):
    code = 409
    message = 'Registro duplicado.'


class ReferentialConflictError(ConflictError):
    message = 'Não é possível deletar. O recurso está associado a agendamentos existentes.'


class AuthError(PetshopError):
    code = 401
    message = 'Acesso negado.'


class InvalidCredentialsError(AuthError):
    message = 'Credenciais inválidas.'


class InconsistentStateError(PetshopError):
    message = 'Estado inconsistente após a transação.'


@api.errorhandler(PetshopError)
def handle_petshop_error(error):
    if error.code >= 500:
        logger.error(f"{type(error).__name__}: {error.message}")
        body = {'message': PetshopError.message}
        if current_app.config.get('EXPOSE_ERROR_DETAILS'):
            body['error'] = error.message
        return body, error.code
    return error.to_dict(), error.code


@api.errorhandler
def handle_unexpected_error(error):
    logger.exception(f"Unhandled error: {error}")
    body = {'message': PetshopError.message}
    if current_app.config.get('EXPOSE_ERROR_DETAILS'):
        body['error'] = str(error)
    return body, 500
