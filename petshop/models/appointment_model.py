import enum
from petshop import db
from petshop.models.relationship_model import appointment_dog, appointment_service
from petshop.utils.util import new_id, utcnow


class AppointmentStatus(enum.Enum):
    AGENDADO = 'AGENDADO'
    CONCLUIDO = 'CONCLUIDO'
    CANCELADO = 'CANCELADO'


class Appointment(db.Model):
    __tablename__ = 'appointment'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.Enum(AppointmentStatus), nullable=False, default=AppointmentStatus.AGENDADO)
    user_id = db.Column(db.String(36), db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    dogs = db.relationship('Dog', secondary=appointment_dog, order_by='Dog.nome',
                           backref=db.backref('appointments', lazy=True))
    services = db.relationship('Service', secondary=appointment_service, order_by='Service.name',
                               backref=db.backref('appointments', lazy=True))

    def __repr__(self):
        return f'<Appointment {self.id} by User {self.user_id}>'
