# User service module for business logic
import logging
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from petshop import db
from petshop.errors import ConflictError, ForbiddenError, NotFoundError
from petshop.models import User
from petshop.utils.util import format_datetime

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = 'E-mail ou CPF já cadastrado.'


def format_user(user):
    # password_hash never leaves this module
    return {
        'id': user.id,
        'nome': user.nome,
        'email': user.email,
        'cpf': user.cpf,
        'idade': user.idade,
        'telefone': user.telefone,
        'createdAt': format_datetime(user.created_at),
        'updatedAt': format_datetime(user.updated_at)
    }


def email_or_cpf_taken(email=None, cpf=None, exclude_id=None):
    conditions = []
    if email is not None:
        conditions.append(User.email == email)
    if cpf is not None:
        conditions.append(User.cpf == cpf)
    if not conditions:
        return False
    query = User.query.filter(or_(*conditions))
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def _get_user_or_404(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError('Usuário não encontrado.')
    return user


def get_all_users():
    users = User.query.order_by(User.created_at.desc()).all()
    return [format_user(u) for u in users]


def get_user(user_id):
    return format_user(_get_user_or_404(user_id))


def update_user(user_id, data, current_user_id):
    if user_id != current_user_id:
        raise ForbiddenError('Você só pode atualizar seu próprio perfil.')
    user = _get_user_or_404(user_id)
    if email_or_cpf_taken(data.get('email'), data.get('cpf'), exclude_id=user.id):
        raise ConflictError(DUPLICATE_MESSAGE)
    for key, value in data.items():
        setattr(user, key, value)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(DUPLICATE_MESSAGE)
    logger.info(f"Updated user {user_id} ({sorted(data)})")
    return format_user(user)


def delete_user(user_id, current_user_id):
    if user_id != current_user_id:
        raise ForbiddenError('Você só pode deletar seu próprio perfil.')
    user = _get_user_or_404(user_id)
    try:
        # dogs and appointments (with their join rows) go with the user
        db.session.delete(user)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Deleted user {user_id}")
