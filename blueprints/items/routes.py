"""
Item routes - the home inventory REST surface

  GET    /api/items         – all items of the caller's home, newest first
  GET    /api/items/<id>    – one item
  POST   /api/items         – create an item
  DELETE /api/items/<id>    – delete an item
"""
from flask import jsonify, abort, current_app
from flask_login import current_user

from . import items_bp
from .forms import ItemForm
from services.item_service import ItemService
from utils.permissions import require_home


@items_bp.route('', methods=['GET'])
def index():
    items = ItemService.list_items()
    return jsonify(items=[item.to_dict() for item in items])


@items_bp.route('/<int:item_id>', methods=['GET'])
def detail(item_id):
    item = ItemService.get_item(item_id)
    if item is None:
        abort(404, description='Item not found')
    return jsonify(item=item.to_dict())


@items_bp.route('', methods=['POST'])
def create():
    require_home()
    form = ItemForm()
    if not form.validate_on_submit():
        abort(400, description=form.first_error())

    item = ItemService.create_item(
        name=form.name.data,
        room=form.room.data,
        category=form.category.data,
        notes=form.notes.data,
        image=(form.image.data or '').strip(),
        created_by=current_user,
    )
    current_app.logger.info(f'Item {item.id} created in home {item.home_id} by user {current_user.id}')
    return jsonify(item=item.to_dict()), 201


@items_bp.route('/<int:item_id>', methods=['DELETE'])
def delete(item_id):
    if not ItemService.delete_item(item_id):
        abort(404, description='Item not found')
    current_app.logger.info(f'Item {item_id} deleted by user {current_user.id}')
    return jsonify(message='Item deleted')
