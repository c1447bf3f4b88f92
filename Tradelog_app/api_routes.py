# Tradelog_app/api_routes.py

from flask import Blueprint, request, jsonify, g

from .metrics_setup import record_trade_mutation
from .tokens import token_required
from .trade_repository import TradeRepository
from .validation import require_json_object

api = Blueprint('api', __name__, url_prefix='/api')


@api.route('/trades', methods=['GET'])
@token_required
def list_trades():
    """All trades of the caller, newest trade_date first"""
    trades = TradeRepository.list_for_user(g.current_user['id'])
    return jsonify([trade.to_dict() for trade in trades])


@api.route('/trades', methods=['POST'])
@token_required
def create_trade():
    data = require_json_object(request.get_json(silent=True))
    trade_id = TradeRepository.create(g.current_user['id'], data)
    record_trade_mutation('create')
    return jsonify({'success': True, 'id': trade_id})


@api.route('/trades/<int:trade_id>', methods=['PUT'])
@token_required
def update_trade(trade_id):
    data = require_json_object(request.get_json(silent=True))
    TradeRepository.update(g.current_user['id'], trade_id, data)
    record_trade_mutation('update')
    return jsonify({'success': True})


@api.route('/trades/<int:trade_id>', methods=['DELETE'])
@token_required
def delete_trade(trade_id):
    TradeRepository.delete(g.current_user['id'], trade_id)
    record_trade_mutation('delete')
    return jsonify({'success': True})
