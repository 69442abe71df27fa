"""Persistence gateway used by the appointment workflow.

The workflow never touches the session directly for writes. It describes the
writes it needs as a :class:`UnitOfWork` and hands that to
:meth:`PersistenceGateway.execute`, which applies every step inside a single
transaction and either commits all of them or rolls all of them back.
"""
import logging
from sqlalchemy.orm import selectinload
from petshop.models import Appointment, Dog, Service

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Ordered list of writes that must succeed or fail together."""

    def __init__(self, description):
        self.description = description
        self._steps = []

    def __len__(self):
        return len(self._steps)

    def step(self, name, fn):
        self._steps.append((name, fn))
        return self

    def add(self, instance):
        def run(session):
            session.add(instance)
            # join rows inserted later reference this row
            session.flush()
        return self.step(f'add {instance!r}', run)

    def update(self, instance, values):
        def run(session):
            for key, value in values.items():
                setattr(instance, key, value)
            session.flush()
        return self.step(f'update {instance!r} {sorted(values)}', run)

    def delete(self, instance):
        def run(session):
            session.delete(instance)
            session.flush()
        return self.step(f'delete {instance!r}', run)

    def delete_links(self, table, appointment_id):
        def run(session):
            session.execute(table.delete().where(table.c.appointment_id == appointment_id))
        return self.step(f'delete {table.name} for {appointment_id}', run)

    def insert_links(self, table, rows):
        def run(session):
            if rows:
                session.execute(table.insert(), rows)
        return self.step(f'insert {len(rows)} into {table.name}', run)

    def apply(self, session):
        for name, fn in self._steps:
            logger.debug(f"[{self.description}] {name}")
            fn(session)


class PersistenceGateway:
    def __init__(self, session):
        self.session = session

    def find_dogs(self, ids, owner_id=None):
        if not ids:
            return []
        query = self.session.query(Dog).filter(Dog.id.in_(ids))
        if owner_id is not None:
            query = query.filter(Dog.owner_id == owner_id)
        return query.all()

    def find_services(self, ids):
        if not ids:
            return []
        return self.session.query(Service).filter(Service.id.in_(ids)).all()

    def get_appointment(self, appointment_id):
        return self.session.get(Appointment, appointment_id)

    def list_appointments(self, user_id):
        return (self.session.query(Appointment)
                .options(selectinload(Appointment.dogs), selectinload(Appointment.services))
                .filter_by(user_id=user_id)
                .order_by(Appointment.date.asc())
                .all())

    def execute(self, unit_of_work):
        try:
            unit_of_work.apply(self.session)
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.exception(f"Rolled back unit of work '{unit_of_work.description}'")
            raise
        logger.debug(f"Committed unit of work '{unit_of_work.description}' ({len(unit_of_work)} steps)")
