# Appointment workflow: booking dogs onto services, the only multi-entity write path
import logging
from petshop.errors import InconsistentStateError, NotFoundError, ValidationError
from petshop.models import Appointment, AppointmentStatus, appointment_dog, appointment_service
from petshop.persistence import UnitOfWork
from petshop.services.catalog_service import format_service
from petshop.services.dog_service import format_dog
from petshop.services.ownership import distinct_ids, validate_existing_service_ids, validate_owned_dog_ids
from petshop.utils.util import format_datetime, new_id, utcnow

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = 'Agendamento não encontrado ou não pertence a você.'


def format_appointment(appointment, include_telefone=False):
    user = appointment.user
    user_data = {'id': user.id, 'nome': user.nome, 'email': user.email}
    if include_telefone:
        user_data['telefone'] = user.telefone
    return {
        'id': appointment.id,
        'date': format_datetime(appointment.date),
        'status': appointment.status.value,
        'userId': appointment.user_id,
        'createdAt': format_datetime(appointment.created_at),
        'updatedAt': format_datetime(appointment.updated_at),
        'user': user_data,
        'dogs': [format_dog(d) for d in appointment.dogs],
        'services': [format_service(s) for s in appointment.services]
    }


def format_appointment_summary(appointment):
    return {
        'id': appointment.id,
        'date': format_datetime(appointment.date),
        'status': appointment.status.value,
        'userId': appointment.user_id,
        'createdAt': format_datetime(appointment.created_at),
        'updatedAt': format_datetime(appointment.updated_at),
        'dogs': [{'nome': d.nome, 'raca': d.raca} for d in appointment.dogs],
        'services': [{'name': s.name, 'price': float(s.price)} for s in appointment.services]
    }


def _dog_links(appointment_id, dog_ids):
    return [{'appointment_id': appointment_id, 'dog_id': dog_id} for dog_id in distinct_ids(dog_ids)]


def _service_links(appointment_id, service_ids):
    return [{'appointment_id': appointment_id, 'service_id': service_id} for service_id in distinct_ids(service_ids)]


class AppointmentWorkflow:
    """
    Create/read/update/delete of appointments together with their dog and
    service sets.

    Every check that can fail (input shape, dog ownership, service existence)
    runs before anything is written. All writes of one call are collected in a
    single UnitOfWork and handed to the gateway once, so the appointment row and
    its join rows change together or not at all.
    """

    def __init__(self, gateway):
        self.gateway = gateway

    def _get_owned(self, appointment_id, caller_user_id):
        appointment = self.gateway.get_appointment(appointment_id)
        if appointment is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        if appointment.user_id != caller_user_id:
            # Same answer as a missing row; the mismatch only shows up in the logs
            logger.warning(f"User {caller_user_id} tried to reach appointment {appointment_id} "
                           f"owned by {appointment.user_id}")
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return appointment

    def _reload(self, appointment_id):
        appointment = self.gateway.get_appointment(appointment_id)
        if appointment is None:
            raise InconsistentStateError(f'Agendamento {appointment_id} não encontrado após a transação.')
        return appointment

    def create(self, caller_user_id, date, dog_ids, service_ids):
        errors = []
        if not dog_ids:
            errors.append({'path': ['dogIds'], 'message': 'Pelo menos um ID de cachorro é obrigatório.'})
        if not service_ids:
            errors.append({'path': ['serviceIds'], 'message': 'Pelo menos um ID de serviço é obrigatório.'})
        if errors:
            raise ValidationError(errors)

        validate_owned_dog_ids(self.gateway, dog_ids, caller_user_id)
        validate_existing_service_ids(self.gateway, service_ids)

        appointment = Appointment(
            id=new_id(),
            date=date,
            user_id=caller_user_id,
            status=AppointmentStatus.AGENDADO
        )
        unit = UnitOfWork(f'create appointment {appointment.id}')
        unit.add(appointment)
        unit.insert_links(appointment_dog, _dog_links(appointment.id, dog_ids))
        unit.insert_links(appointment_service, _service_links(appointment.id, service_ids))
        self.gateway.execute(unit)

        logger.info(f"Created appointment {appointment.id} for user {caller_user_id}")
        return format_appointment(self._reload(appointment.id))

    def get(self, appointment_id, caller_user_id):
        appointment = self._get_owned(appointment_id, caller_user_id)
        return format_appointment(appointment, include_telefone=True)

    def list_for_user(self, caller_user_id):
        appointments = self.gateway.list_appointments(caller_user_id)
        return [format_appointment_summary(a) for a in appointments]

    def update(self, appointment_id, caller_user_id, patch):
        """
        Apply a partial update.

        ``patch`` may hold ``date``, ``status``, ``dog_ids`` and ``service_ids``.
        A supplied id list replaces the whole corresponding set (delete all
        links, insert the new ones); a missing one leaves that set untouched.
        """
        appointment = self._get_owned(appointment_id, caller_user_id)
        unit = UnitOfWork(f'update appointment {appointment_id}')

        values = {key: patch[key] for key in ('date', 'status') if key in patch}
        if values or 'dog_ids' in patch or 'service_ids' in patch:
            values['updated_at'] = utcnow()
            unit.update(appointment, values)

        if 'dog_ids' in patch:
            if not patch['dog_ids']:
                raise ValidationError([{'path': ['dogIds'], 'message': 'Pelo menos um ID de cachorro é obrigatório.'}])
            validate_owned_dog_ids(self.gateway, patch['dog_ids'], caller_user_id)
            unit.delete_links(appointment_dog, appointment_id)
            unit.insert_links(appointment_dog, _dog_links(appointment_id, patch['dog_ids']))

        if 'service_ids' in patch:
            if not patch['service_ids']:
                raise ValidationError([{'path': ['serviceIds'], 'message': 'Pelo menos um ID de serviço é obrigatório.'}])
            validate_existing_service_ids(self.gateway, patch['service_ids'])
            unit.delete_links(appointment_service, appointment_id)
            unit.insert_links(appointment_service, _service_links(appointment_id, patch['service_ids']))

        self.gateway.execute(unit)
        logger.info(f"Updated appointment {appointment_id} ({sorted(patch)}) for user {caller_user_id}")
        return format_appointment(self._reload(appointment_id))

    def delete(self, appointment_id, caller_user_id):
        appointment = self._get_owned(appointment_id, caller_user_id)
        self.gateway.execute(UnitOfWork(f'delete appointment {appointment_id}').delete(appointment))
        logger.info(f"Deleted appointment {appointment_id} for user {caller_user_id}")
