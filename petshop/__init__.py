import logging
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from petshop.config import Config

migrate = Migrate()
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

api = Api(
    title='Petshop API',
    version='1.0',
    description='Agendamento de serviços para cães',
    doc='/docs',
    ui_config={
        'docExpansion': 'none',
        'filter': True,
        'defaultModelsExpandDepth': 1,
        'defaultModelExpandDepth': 1
    },
    security=[{'BearerAuth': []}],
    authorizations={
        'BearerAuth': {
            'type': 'apiKey',
            'in': 'header',
            'name': 'Authorization',
            'description': 'Enter your JWT token as "Bearer <token>"'
        }
    }
)


def create_app(config_class=Config, breed_validator=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    # Breed registry is injected so tests never touch the network
    if breed_validator is None:
        from .utils.breeds import DogCeoBreedValidator
        breed_validator = DogCeoBreedValidator(
            url=app.config['DOG_BREEDS_URL'],
            timeout=app.config['DOG_BREEDS_TIMEOUT']
        )
    app.extensions['breed_validator'] = breed_validator

    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "OPTIONS"]))

    # Importing these registers tables, error handlers and namespaces
    from . import models, errors, routes  # noqa: F401
    api.init_app(app)

    with app.app_context():
        db.create_all()

    return app
