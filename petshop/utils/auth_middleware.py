import logging
from functools import wraps
from flask import g, request
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException, NoAuthorizationError
from jwt.exceptions import PyJWTError
from petshop.errors import AuthError

logger = logging.getLogger(__name__)


def generate_token(user):
    return create_access_token(identity=user.id, additional_claims={'email': user.email})


def token_required(f):
    """Resolve the bearer token to ``g.identity = {'id': ..., 'email': ...}``."""
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            verify_jwt_in_request()
        except NoAuthorizationError as e:
            # a header in another scheme (Basic, Token) is a bad credential, not a missing one
            if request.headers.get('Authorization', '').strip():
                logger.info(f"Rejected authorization header: {e}")
                raise AuthError('Token inválido ou expirado.', 403)
            raise AuthError('Acesso negado. Token não fornecido.', 401)
        except (JWTExtendedException, PyJWTError) as e:
            logger.info(f"Rejected bearer token: {e}")
            raise AuthError('Token inválido ou expirado.', 403)

        identity = {'id': get_jwt_identity(), 'email': get_jwt().get('email')}
        if not identity['id'] or not identity['email']:
            raise AuthError('Token inválido.', 403)
        g.identity = identity
        return f(*args, **kwargs)
    return decorated


def current_identity():
    return g.identity
