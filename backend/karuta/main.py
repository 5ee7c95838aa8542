from flask import Blueprint, current_app, jsonify
from karuta.models import load_catalog
from karuta.services.games.validator import validate_collection

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the karuta game server!'})


@main.route('/api/poems', methods=['GET'])
def get_poems():
    poems = load_catalog()
    if not poems:
        current_app.logger.warning("[poems] catalog is empty; run `flask seed-poems`")
        return jsonify({'error': 'Poem data has not been loaded'}), 500
    return jsonify([p.to_dict() for p in poems])


@main.route('/api/poems/validate', methods=['GET'])
def validate_poems():
    result = validate_collection([p.to_dict() for p in load_catalog()])
    return jsonify(result.to_dict())
