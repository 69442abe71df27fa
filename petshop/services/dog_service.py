# Dog service module for business logic
import logging
from petshop import db
from petshop.errors import NotFoundError
from petshop.models import Dog
from petshop.utils.util import format_datetime

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = 'Cachorro não encontrado.'


def format_dog(dog, include_owner=False):
    result = {
        'id': dog.id,
        'nome': dog.nome,
        'idade': dog.idade,
        'raca': dog.raca,
        'porte': dog.porte.value,
        'ownerId': dog.owner_id,
        'createdAt': format_datetime(dog.created_at),
        'updatedAt': format_datetime(dog.updated_at)
    }
    if include_owner:
        owner = dog.owner
        result['owner'] = {
            'id': owner.id,
            'nome': owner.nome,
            'email': owner.email,
            'telefone': owner.telefone
        }
    return result


def get_owned_dog(dog_id, owner_id):
    """Another user's dog is reported exactly like a missing one."""
    dog = db.session.get(Dog, dog_id)
    if dog is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    if dog.owner_id != owner_id:
        logger.warning(f"User {owner_id} tried to reach dog {dog_id} owned by {dog.owner_id}")
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return dog


def get_dogs_for_owner(owner_id):
    dogs = Dog.query.filter_by(owner_id=owner_id).order_by(Dog.nome.asc()).all()
    return [format_dog(d) for d in dogs]


def get_dog(dog_id, owner_id, include_owner=False):
    return format_dog(get_owned_dog(dog_id, owner_id), include_owner=include_owner)


def create_dog(data, owner_id):
    dog = Dog(
        nome=data['nome'],
        idade=data['idade'],
        raca=data['raca'],
        porte=data['porte'],
        owner_id=owner_id
    )
    try:
        db.session.add(dog)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Created dog {dog.id} for user {owner_id}")
    return format_dog(dog)


def update_dog(dog_id, data, owner_id):
    dog = get_owned_dog(dog_id, owner_id)
    # owner_id is never part of data, so ownership can't move
    for key in ('nome', 'idade', 'raca', 'porte'):
        if key in data:
            setattr(dog, key, data[key])
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return format_dog(dog)


def delete_dog(dog_id, owner_id):
    dog = get_owned_dog(dog_id, owner_id)
    try:
        # the ORM removes this dog's appointment_dog rows along with it
        db.session.delete(dog)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Deleted dog {dog_id} for user {owner_id}")
