import uuid
from datetime import timedelta
from dateutil.parser import isoparse
from petshop.models import AppointmentStatus
from petshop.schemas import SchemaErrors, require_object
from petshop.utils.util import to_naive_utc, utcnow


def parse_and_validate_date(date_str, min_lead_seconds):
    """Parse an ISO-8601 date and require it to be at least ``min_lead_seconds`` ahead."""
    if not isinstance(date_str, str):
        raise ValueError('Formato de data inválido. Use ISO 8601 (YYYY-MM-DDTHH:MM:SS).')
    try:
        appointment_date = to_naive_utc(isoparse(date_str))
    except (ValueError, TypeError, OverflowError):
        raise ValueError('Formato de data inválido. Use ISO 8601 (YYYY-MM-DDTHH:MM:SS).')
    if appointment_date < utcnow() + timedelta(seconds=min_lead_seconds):
        raise ValueError('A data do agendamento deve ser no futuro.')
    return appointment_date


def _validate_ids(data, key, label, errors):
    value = data.get(key)
    if not isinstance(value, list) or not value:
        errors.add(key, f'Pelo menos um ID de {label} é obrigatório.')
        return None
    ids = []
    for index, item in enumerate(value):
        if not _is_uuid(item):
            errors.add([key, index], f'ID de {label} inválido.')
            continue
        ids.append(item)
    return ids


def _is_uuid(value):
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def validate_create_appointment(data, min_lead_seconds):
    data = require_object(data)
    errors = SchemaErrors()

    appointment_date = None
    if 'date' not in data:
        errors.add('date', 'A data do agendamento é obrigatória.')
    else:
        try:
            appointment_date = parse_and_validate_date(data['date'], min_lead_seconds)
        except ValueError as e:
            errors.add('date', str(e))

    dog_ids = _validate_ids(data, 'dogIds', 'cachorro', errors)
    service_ids = _validate_ids(data, 'serviceIds', 'serviço', errors)
    errors.raise_if_any()

    return {'date': appointment_date, 'dog_ids': dog_ids, 'service_ids': service_ids}


def validate_update_appointment(data, min_lead_seconds):
    """Only keys present in the payload end up in the patch."""
    data = require_object(data)
    errors = SchemaErrors()
    patch = {}

    if 'date' in data:
        try:
            patch['date'] = parse_and_validate_date(data['date'], min_lead_seconds)
        except ValueError as e:
            errors.add('date', str(e))

    if 'status' in data:
        try:
            patch['status'] = AppointmentStatus(data['status'])
        except ValueError:
            allowed = ', '.join(s.value for s in AppointmentStatus)
            errors.add('status', f'Status inválido. Permitidos: {allowed}.')

    if 'dogIds' in data:
        patch['dog_ids'] = _validate_ids(data, 'dogIds', 'cachorro', errors)
    if 'serviceIds' in data:
        patch['service_ids'] = _validate_ids(data, 'serviceIds', 'serviço', errors)

    errors.raise_if_any()
    return patch
