# clubportal/api/routes.py

import logging
from flask import request, jsonify, g
from werkzeug.datastructures import ImmutableMultiDict

from clubportal import services
from clubportal.context import site_settings
from clubportal.dashboard.forms import ProjectForm, EventForm
from clubportal.errors import DocumentNotFound, PortalError
from clubportal.identity import IdentityClient
from clubportal.permissions import MANAGE_PROJECTS, MANAGE_EVENTS
from clubportal.services import UserDirectory
from clubportal.session_store import SessionProfile
from clubportal.utils import serialize_document
from . import api_bp
from .tokens import issue_token, revoke_token, bearer_token, token_required, error_response

logger = logging.getLogger(__name__)

RESOURCES = {
    'projects': (services.projects, ProjectForm, MANAGE_PROJECTS),
    'events': (services.events, EventForm, MANAGE_EVENTS),
}


def _json_payload():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _validated(form_class, payload):
    """Runs the screen's form validators over a JSON payload."""
    normalized = {key: '' if value is None else str(value) for key, value in payload.items()}
    form = form_class(formdata=ImmutableMultiDict(normalized), meta={'csrf': False})
    if form.validate():
        return form.to_document(), None
    messages = [f"{name}: {', '.join(errors)}" for name, errors in form.errors.items()]
    return None, "; ".join(messages)


HTTP_ERROR_MESSAGES = {404: "Not found", 405: "Method not allowed"}


def api_http_error(e):
    """
    App-wide 404/405 handler. Routing errors happen before a blueprint is
    chosen, so /api paths get their {message} body here; other paths keep
    the default HTML page.
    """
    if request.path == '/api' or request.path.startswith('/api/'):
        return error_response(HTTP_ERROR_MESSAGES.get(e.code, e.name), e.code)
    return e


@api_bp.route('/auth/login', methods=['POST'])
def login():
    payload = _json_payload() or {}
    username = payload.get('username') or payload.get('email')
    password = payload.get('password')
    if not username or not password:
        return error_response("Username and password are required", 400)

    record = UserDirectory().find_by_login(username)
    # The identity check runs against a throwaway state so no browser session changes
    if record is None or not IdentityClient({}).verify_password(record['email'], password):
        logger.info(f"API login failed for {username}")
        return error_response("Invalid username or password", 401)

    token = issue_token(record['uid'])
    return jsonify({"token": token, "user": SessionProfile.from_user(record).to_dict()})


@api_bp.route('/auth/logout', methods=['POST'])
@token_required()
def logout():
    revoke_token(bearer_token())
    return jsonify({"message": "Logged out"})


@api_bp.route('/auth/me')
@token_required()
def me():
    return jsonify(g.api_user.to_dict())


@api_bp.route('/site-settings')
def get_site_settings():
    return jsonify(serialize_document(site_settings().get_or_defaults()))


def _register_resource(name, repository_factory, form_class, capability):

    def list_public():
        return jsonify([serialize_document(item) for item in repository_factory().list()])

    @token_required()
    def list_dashboard():
        return jsonify([serialize_document(item) for item in repository_factory().list()])

    @token_required(capability)
    def create():
        payload = _json_payload()
        if payload is None:
            return error_response("Expected a JSON object", 400)
        document, problem = _validated(form_class, payload)
        if problem:
            return error_response(problem, 400)
        repository = repository_factory()
        doc_id = repository.add(document)
        logger.info(f"{g.api_user.uid} created {name}/{doc_id} via API")
        return jsonify(serialize_document(repository.get(doc_id))), 201

    @token_required(capability)
    def update(doc_id):
        payload = _json_payload()
        if payload is None:
            return error_response("Expected a JSON object", 400)
        repository = repository_factory()
        existing = repository.get(doc_id)
        if existing is None:
            return error_response(f"No {name[:-1]} {doc_id}", 404)
        merged = {key: existing.get(key) for key in form_class.document_fields}
        merged.update(payload)
        document, problem = _validated(form_class, merged)
        if problem:
            return error_response(problem, 400)
        repository.update(doc_id, document)
        return jsonify(serialize_document(repository.get(doc_id)))

    @token_required(capability)
    def delete(doc_id):
        try:
            repository_factory().delete(doc_id)
        except DocumentNotFound:
            return error_response(f"No {name[:-1]} {doc_id}", 404)
        return jsonify({"message": "Deleted"})

    api_bp.add_url_rule(f'/{name}', f'list_{name}', list_public, methods=['GET'])
    api_bp.add_url_rule(f'/{name}/_dashboard/all', f'dashboard_{name}', list_dashboard, methods=['GET'])
    api_bp.add_url_rule(f'/{name}', f'create_{name[:-1]}', create, methods=['POST'])
    api_bp.add_url_rule(f'/{name}/<doc_id>', f'update_{name[:-1]}', update, methods=['PATCH'])
    api_bp.add_url_rule(f'/{name}/<doc_id>', f'delete_{name[:-1]}', delete, methods=['DELETE'])


for _name, (_factory, _form_class, _capability) in RESOURCES.items():
    _register_resource(_name, _factory, _form_class, _capability)


@api_bp.errorhandler(PortalError)
def portal_error(e):
    return error_response(str(e), 400)
