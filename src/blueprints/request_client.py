import logging

from flask import Blueprint, request, jsonify
from api.body_formatter import beautify_body, fix_body
from api.exceptions import InvalidUrlError, RequestExecutionError, RequestTimeoutError
from api.executor import (
    execute_request, format_duration, format_response_body, format_size,
    get_status_class, is_content_type_accepted
)
from api.models import RequestConfig
from config.settings import get_api_client_settings

logger = logging.getLogger(__name__)

request_bp = Blueprint('request_client', __name__)

@request_bp.route('/api/request/execute', methods=['POST'])
def api_execute_request():
    """Execute a request configuration and return the response"""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('request'), dict):
            return jsonify({'success': False, 'error': 'Request configuration is required'}), 400

        settings = get_api_client_settings()
        config = RequestConfig.from_dict(data['request'], settings.get('verify_ssl', True))

        try:
            response = execute_request(config, settings=settings)
        except InvalidUrlError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except RequestTimeoutError as e:
            return jsonify({'success': False, 'error': str(e)}), 504
        except RequestExecutionError as e:
            return jsonify({'success': False, 'error': str(e)}), 502

        # Large bodies are returned as-is
        if response.size <= settings.get('max_body_size', 1024 * 1024):
            formatted_body = format_response_body(response.body, response.content_type)
        else:
            formatted_body = response.body

        result = {
            'success': True,
            'response': response.to_dict(),
            'formatted_body': formatted_body,
            'display': {
                'size': format_size(response.size),
                'duration': format_duration(response.duration),
                'status_class': get_status_class(response.status)
            },
            'accepted': True
        }

        accepted_types = data.get('accept_content_types') or []
        if (200 <= response.status < 300
                and not is_content_type_accepted(response.content_type, accepted_types)):
            result['accepted'] = False
            result['error'] = (f'Response content type "{response.content_type}" is not accepted. '
                               f'Expected: {", ".join(accepted_types)}')

        return jsonify(result)

    except Exception as e:
        logger.exception("Failed to execute request")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500

@request_bp.route('/api/request/beautify', methods=['POST'])
def api_beautify_body():
    """Pretty-print a request body according to its content type"""
    try:
        data = request.get_json(silent=True)
        if not data or not isinstance(data, dict):
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        body = data.get('body', '')
        if not isinstance(body, str):
            return jsonify({'success': False, 'error': 'Body must be a string'}), 400
        content_type = str(data.get('content_type') or '')
        return jsonify({'success': True, 'body': beautify_body(body, content_type)})

    except Exception as e:
        logger.exception("Failed to beautify body")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500

@request_bp.route('/api/request/fix-body', methods=['POST'])
def api_fix_body():
    """Repair an almost-JSON request body"""
    try:
        data = request.get_json(silent=True)
        if not data or not isinstance(data, dict):
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        body = data.get('body', '')
        if not isinstance(body, str):
            return jsonify({'success': False, 'error': 'Body must be a string'}), 400
        content_type = str(data.get('content_type') or '')
        return jsonify({'success': True, 'body': fix_body(body, content_type)})

    except Exception as e:
        logger.exception("Failed to fix body")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
