from petshop import db

# Association table for Appointments and Dogs (M:N)
appointment_dog = db.Table('appointment_dog',
    db.Column('appointment_id', db.String(36), db.ForeignKey('appointment.id', ondelete='CASCADE'), primary_key=True),
    db.Column('dog_id', db.String(36), db.ForeignKey('dog.id', ondelete='CASCADE'), primary_key=True)
)

# Association table for Appointments and Services (M:N)
# No cascade from the service side: a linked service cannot be deleted
appointment_service = db.Table('appointment_service',
    db.Column('appointment_id', db.String(36), db.ForeignKey('appointment.id', ondelete='CASCADE'), primary_key=True),
    db.Column('service_id', db.String(36), db.ForeignKey('service.id'), primary_key=True)
)
