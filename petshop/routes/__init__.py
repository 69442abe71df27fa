# petshop/routes/__init__.py
from petshop import api
from .auth_routes import auth_ns
from .users_routes import users_ns
from .dog_routes import dog_ns
from .service_routes import service_ns
from .appointment_routes import appointment_ns

api.add_namespace(auth_ns)
api.add_namespace(users_ns)
api.add_namespace(dog_ns)
api.add_namespace(service_ns)
api.add_namespace(appointment_ns)
