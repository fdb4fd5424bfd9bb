"""
Click tracking routes - guest ingestion and dashboard analytics
"""
import uuid
from flask import Blueprint, jsonify, request
from gallery_api.services.click_service import (
    ClickService,
    ClickQueryError,
    parse_buttons,
    resolve_time_range,
)
from gallery_api.utils.auth import require_auth
from gallery_api.utils.response import validate_uuid
from gallery_api.utils.routes_helpers import (
    get_pagination_params,
    build_pagination_response,
    handle_db_error,
)

clicks_bp = Blueprint('clicks', __name__)


@clicks_bp.route('', methods=['POST'])
def log_click():
    """Record a button click from the public site"""
    data = request.get_json(silent=True) or {}
    button = data.get('button')
    page = data.get('page')

    if not isinstance(button, str) or not isinstance(page, str) or not button.strip() or not page.strip():
        return jsonify({'message': 'Button and page are required'}), 400

    try:
        ClickService().log_click(button, page)
        return jsonify({'message': 'Click logged successfully'}), 201

    except Exception as e:
        return handle_db_error(e, 'Server error logging click')


@clicks_bp.route('', methods=['GET'])
@require_auth
def get_clicks():
    """Paginated click logs, optionally filtered by a comma separated button list"""
    try:
        page, limit = get_pagination_params()
        buttons = parse_buttons(request.args.get('buttons'))

        clicks = ClickService().list_clicks(page=page, limit=limit, buttons=buttons)

        return jsonify({
            'clicks': [click.to_dict() for click in clicks.items],
            'total': clicks.total,
            'pagination': build_pagination_response(clicks)
        })

    except Exception as e:
        return handle_db_error(e, 'Server error fetching click logs')


@clicks_bp.route('/summary', methods=['GET'])
@require_auth
def get_click_summary():
    """Aggregated click counts for the dashboard charts"""
    try:
        since, until = resolve_time_range(
            request.args.get('range', 'all'),
            start=request.args.get('start'),
            end=request.args.get('end')
        )
    except ClickQueryError as e:
        return jsonify({'message': str(e)}), 400

    try:
        summary = ClickService().summarize(
            buttons=parse_buttons(request.args.get('buttons')),
            since=since,
            until=until
        )
        summary['range'] = request.args.get('range', 'all')
        return jsonify(summary)

    except Exception as e:
        return handle_db_error(e, 'Server error summarizing click logs')


@clicks_bp.route('/<click_id>', methods=['DELETE'])
@require_auth
def delete_click(click_id):
    """Delete a single click log"""
    if not validate_uuid(click_id):
        return jsonify({'message': 'Click log not found'}), 404

    try:
        if not ClickService().delete_click(uuid.UUID(click_id)):
            return jsonify({'message': 'Click log not found'}), 404

        return jsonify({'message': 'Click log deleted successfully'})

    except Exception as e:
        return handle_db_error(e, 'Server error deleting click log')


@clicks_bp.route('', methods=['DELETE'])
@require_auth
def delete_all_clicks():
    """Delete every click log"""
    try:
        deleted = ClickService().delete_all()
        return jsonify({'message': 'All click logs deleted successfully', 'deleted': deleted})

    except Exception as e:
        return handle_db_error(e, 'Server error deleting all click logs')
