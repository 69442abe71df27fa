# Registration and login
import logging
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from petshop import db, bcrypt
from petshop.errors import ConflictError, InvalidCredentialsError
from petshop.models import User
from petshop.services.user_service import DUPLICATE_MESSAGE, email_or_cpf_taken, format_user
from petshop.utils.auth_middleware import generate_token

logger = logging.getLogger(__name__)


def register_user(data):
    if email_or_cpf_taken(data['email'], data['cpf']):
        raise ConflictError(DUPLICATE_MESSAGE)

    user = User(
        nome=data['nome'],
        email=data['email'],
        cpf=data['cpf'],
        idade=data['idade'],
        telefone=data.get('telefone'),
        password_hash=bcrypt.generate_password_hash(data['password']).decode('utf-8')
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(DUPLICATE_MESSAGE)

    logger.info(f"Registered user {user.id}")
    return {
        'message': 'Registro realizado com sucesso!',
        'user': format_user(user),
        'token': generate_token(user)
    }


def login_user(identifier, password):
    """``identifier`` is either the e-mail or the CPF."""
    if '@' in identifier:
        identifier = identifier.lower()
    user = User.query.filter(or_(User.email == identifier, User.cpf == identifier)).first()

    # unknown user and wrong password look the same from outside
    if not user or not bcrypt.check_password_hash(user.password_hash, password):
        raise InvalidCredentialsError()

    return {
        'message': 'Login realizado com sucesso!',
        'user': format_user(user),
        'token': generate_token(user)
    }
