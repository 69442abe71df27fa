from flask_restx import Namespace, Resource, fields
from flask import request, current_app
from petshop import db
from petshop.persistence import PersistenceGateway
from petshop.schemas.appointment_schema import validate_create_appointment, validate_update_appointment
from petshop.services.appointment_service import AppointmentWorkflow
from petshop.utils.auth_middleware import token_required, current_identity

appointment_ns = Namespace('appointments', description='Agendamento de serviços', path='/appointments')

# Swagger models
appointment_create_model = appointment_ns.model('AppointmentCreate', {
    'date': fields.DateTime(required=True, description='Data em ISO 8601, no futuro'),
    'dogIds': fields.List(fields.String, required=True, description='IDs dos cachorros (do usuário)'),
    'serviceIds': fields.List(fields.String, required=True, description='IDs dos serviços'),
})

appointment_update_model = appointment_ns.model('AppointmentUpdate', {
    'date': fields.DateTime(description='Nova data em ISO 8601'),
    'status': fields.String(enum=['AGENDADO', 'CONCLUIDO', 'CANCELADO']),
    'dogIds': fields.List(fields.String, description='Substitui o conjunto de cachorros'),
    'serviceIds': fields.List(fields.String, description='Substitui o conjunto de serviços'),
})


def get_workflow():
    return AppointmentWorkflow(PersistenceGateway(db.session))


def min_lead_seconds():
    return current_app.config['APPOINTMENT_MIN_LEAD_SECONDS']


@appointment_ns.route('')
class AppointmentList(Resource):
    @token_required
    @appointment_ns.doc('list_appointments', security='BearerAuth')
    def get(self):
        """Lista os agendamentos do usuário logado, por data"""
        return get_workflow().list_for_user(current_identity()['id']), 200

    @token_required
    @appointment_ns.expect(appointment_create_model)
    @appointment_ns.doc('create_appointment', security='BearerAuth')
    def post(self):
        """Cria um novo agendamento"""
        data = validate_create_appointment(request.get_json(silent=True), min_lead_seconds())
        appointment = get_workflow().create(
            current_identity()['id'],
            data['date'],
            data['dog_ids'],
            data['service_ids']
        )
        return {'message': 'Agendamento criado com sucesso!', 'appointment': appointment}, 201


@appointment_ns.route('/<string:appointment_id>')
class AppointmentResource(Resource):
    @token_required
    @appointment_ns.doc('get_appointment', security='BearerAuth')
    def get(self, appointment_id):
        """Busca um agendamento pelo ID"""
        return get_workflow().get(appointment_id, current_identity()['id']), 200

    @token_required
    @appointment_ns.expect(appointment_update_model)
    @appointment_ns.doc('update_appointment', security='BearerAuth')
    def put(self, appointment_id):
        """Atualiza um agendamento"""
        patch = validate_update_appointment(request.get_json(silent=True), min_lead_seconds())
        appointment = get_workflow().update(appointment_id, current_identity()['id'], patch)
        return {'message': 'Agendamento atualizado com sucesso.', 'appointment': appointment}, 200

    @token_required
    @appointment_ns.doc('delete_appointment', security='BearerAuth')
    def delete(self, appointment_id):
        """Deleta um agendamento"""
        get_workflow().delete(appointment_id, current_identity()['id'])
        return '', 204
