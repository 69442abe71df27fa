# Catalog of petshop services (bath, grooming, ...) open to every caller for reading
import logging
from sqlalchemy.exc import IntegrityError
from petshop import db
from petshop.errors import ConflictError, NotFoundError, ReferentialConflictError
from petshop.models import Service, appointment_service
from petshop.utils.util import format_datetime

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = 'Serviço com este nome já existe.'


def format_service(service):
    return {
        'id': service.id,
        'name': service.name,
        'price': float(service.price),
        'createdAt': format_datetime(service.created_at),
        'updatedAt': format_datetime(service.updated_at)
    }


def _get_service_or_404(service_id):
    service = db.session.get(Service, service_id)
    if service is None:
        raise NotFoundError('Serviço não encontrado.')
    return service


def _name_taken(name, exclude_id=None):
    query = Service.query.filter(Service.name == name)
    if exclude_id is not None:
        query = query.filter(Service.id != exclude_id)
    return query.first() is not None


def _commit(name, exclude_id=None):
    """Commit a create/update; only a name collision becomes a 409."""
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning(f"Service write rejected by the database: {e.orig}")
        # another request may have taken the name after the pre-check
        if name is not None and _name_taken(name, exclude_id=exclude_id):
            raise ConflictError(DUPLICATE_MESSAGE)
        raise


def get_all_services():
    return [format_service(s) for s in Service.query.order_by(Service.name.asc()).all()]


def get_service(service_id):
    return format_service(_get_service_or_404(service_id))


def create_service(data):
    if _name_taken(data['name']):
        raise ConflictError(DUPLICATE_MESSAGE)
    service = Service(name=data['name'], price=data['price'])
    db.session.add(service)
    _commit(data['name'])
    logger.info(f"Created service {service.id} ({service.name})")
    return format_service(service)


def update_service(service_id, data):
    service = _get_service_or_404(service_id)
    if 'name' in data and _name_taken(data['name'], exclude_id=service.id):
        raise ConflictError(DUPLICATE_MESSAGE)
    for key in ('name', 'price'):
        if key in data:
            setattr(service, key, data[key])
    _commit(data.get('name'), exclude_id=service_id)
    return format_service(service)


def delete_service(service_id):
    service = _get_service_or_404(service_id)
    linked = db.session.query(appointment_service).filter_by(service_id=service.id).first()
    if linked is not None:
        raise ReferentialConflictError(
            'Não é possível deletar. O serviço está associado a agendamentos existentes.')
    try:
        db.session.delete(service)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ReferentialConflictError(
            'Não é possível deletar. O serviço está associado a agendamentos existentes.')
    logger.info(f"Deleted service {service_id}")
