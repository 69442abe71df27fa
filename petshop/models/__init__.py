from .relationship_model import appointment_dog, appointment_service
from .user_model import User
from .dog_model import Dog, Porte
from .service_model import Service
from .appointment_model import Appointment, AppointmentStatus
