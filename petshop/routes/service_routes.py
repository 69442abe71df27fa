from flask_restx import Namespace, Resource, fields
from flask import request
from petshop.schemas.service_schema import validate_service
from petshop.services import catalog_service
from petshop.utils.auth_middleware import token_required

service_ns = Namespace('services', description='Serviços oferecidos pelo petshop', path='/services')

service_model = service_ns.model('Service', {
    'name': fields.String(required=True, min_length=2),
    'price': fields.Float(required=True, min=0.01),
})


@service_ns.route('')
class ServiceList(Resource):
    def get(self):
        """Lista todos os serviços (público)"""
        return catalog_service.get_all_services(), 200

    @token_required
    @service_ns.expect(service_model)
    @service_ns.doc('create_service', security='BearerAuth')
    def post(self):
        """Cria um novo serviço"""
        data = validate_service(request.get_json(silent=True))
        service = catalog_service.create_service(data)
        return {'message': 'Serviço criado com sucesso!', 'service': service}, 201


@service_ns.route('/<string:service_id>')
class ServiceResource(Resource):
    def get(self, service_id):
        """Busca um serviço por ID (público)"""
        return catalog_service.get_service(service_id), 200

    @token_required
    @service_ns.expect(service_model)
    @service_ns.doc('update_service', security='BearerAuth')
    def put(self, service_id):
        """Atualiza um serviço"""
        data = validate_service(request.get_json(silent=True), partial=True)
        service = catalog_service.update_service(service_id, data)
        return {'message': 'Serviço atualizado com sucesso.', 'service': service}, 200

    @token_required
    @service_ns.doc('delete_service', security='BearerAuth')
    def delete(self, service_id):
        """Deleta um serviço que não esteja em nenhum agendamento"""
        catalog_service.delete_service(service_id)
        return '', 204
