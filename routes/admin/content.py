"""
Admin CMS content API: create, update, delete and reorder for every content type
"""
from flask import Blueprint, jsonify, request

from routes.admin.auth import admin_required, get_request_context
from utils.content_types import CONTENT_TYPES, global_content, sections
from utils.errors import NotFound, ValidationFailed

admin_content_bp = Blueprint('admin_content', __name__)

# Query-string filters accepted by the list endpoint
LIST_FILTERS = ('page_id', 'category_id', 'published')


def _handler(content_type):
    handler = CONTENT_TYPES.get(content_type)
    if handler is None:
        raise NotFound(f'Unknown content type: {content_type}')
    return handler


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed('Request body must be a JSON object')
    return data


def _filters():
    filters = {}
    for name in LIST_FILTERS:
        value = request.args.get(name)
        if value is None:
            continue
        filters[name] = value.lower() in ('true', '1') if name == 'published' else value
    return filters


@admin_content_bp.route('/<content_type>', methods=['GET'])
@admin_required
def list_items(content_type):
    """List rows of one content type"""
    handler = _handler(content_type)
    items = handler.list(get_request_context(), **_filters())
    return jsonify({'success': True, 'items': items})


@admin_content_bp.route('/<content_type>', methods=['POST'])
@admin_required
def create_item(content_type):
    """Create a row"""
    handler = _handler(content_type)
    if handler is global_content:
        data = _payload()
        item = handler.upsert(get_request_context(), data.get('key'), {'content': data.get('content')})
        return jsonify({'success': True, 'id': item['id']}), 201
    item_id = handler.create(get_request_context(), _payload())
    return jsonify({'success': True, 'id': item_id}), 201


@admin_content_bp.route('/<content_type>/<key>', methods=['GET'])
@admin_required
def get_item(content_type, key):
    handler = _handler(content_type)
    return jsonify({'success': True, 'item': handler.get(get_request_context(), key)})


@admin_content_bp.route('/<content_type>/<key>', methods=['PATCH'])
@admin_required
def update_item(content_type, key):
    """Partial update: only fields present in the body are written"""
    handler = _handler(content_type)
    item = handler.update(get_request_context(), key, _payload())
    return jsonify({'success': True, 'item': item})


@admin_content_bp.route('/<content_type>/<key>', methods=['DELETE'])
@admin_required
def delete_item(content_type, key):
    handler = _handler(content_type)
    handler.delete(get_request_context(), key)
    return jsonify({'success': True})


@admin_content_bp.route('/global/<key>', methods=['PUT'])
@admin_required
def put_global_content(key):
    """Create or replace a global content block (navbar, footer, ...)"""
    data = _payload()
    if 'content' not in data:
        raise ValidationFailed('content: Required')
    item = global_content.upsert(get_request_context(), key, {'content': data['content']})
    return jsonify({'success': True, 'item': item})


@admin_content_bp.route('/<content_type>/reorder', methods=['POST'])
@admin_required
def reorder_items(content_type):
    """Body: {"parent_id": ..., "ids": [...]}; positions become list indexes"""
    handler = _handler(content_type)
    data = _payload()
    if not data.get('parent_id'):
        raise ValidationFailed('parent_id: Required')
    positions = handler.reorder(get_request_context(), data['parent_id'], data.get('ids'))
    return jsonify({'success': True, 'positions': positions})


@admin_content_bp.route('/pages/<page_id>/sections/reorder', methods=['POST'])
@admin_required
def reorder_page_sections(page_id):
    """Body: {"section_ids": [...]}"""
    data = _payload()
    positions = sections.reorder(get_request_context(), page_id, data.get('section_ids'))
    return jsonify({'success': True, 'positions': positions})
