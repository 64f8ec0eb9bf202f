import logging

from flask import Blueprint, request, jsonify
from api.curl_parser import parse_curl, to_curl, validate_url
from api.models import RequestConfig

logger = logging.getLogger(__name__)

curl_bp = Blueprint('curl', __name__)

@curl_bp.route('/api/curl/parse', methods=['POST'])
def api_parse_curl():
    """Parse a cURL command into a request configuration"""
    try:
        data = request.get_json(silent=True)
        if not data or not isinstance(data, dict):
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        command = data.get('command', '')
        if not isinstance(command, str) or not command.strip():
            return jsonify({'success': False, 'error': 'Please enter a cURL command'}), 400

        config = parse_curl(command)
        if not config.url:
            return jsonify({'success': False, 'error': 'Could not find URL in cURL command'}), 400

        return jsonify({'success': True, 'request': config.to_dict()})

    except Exception as e:
        logger.exception("Failed to parse cURL command")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500

@curl_bp.route('/api/curl/build', methods=['POST'])
def api_build_curl():
    """Render a request configuration as a cURL command"""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('request'), dict):
            return jsonify({'success': False, 'error': 'Request configuration is required'}), 400

        config = RequestConfig.from_dict(data['request'])
        return jsonify({'success': True, 'curl': to_curl(config)})

    except Exception as e:
        logger.exception("Failed to build cURL command")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500

@curl_bp.route('/api/curl/validate-url', methods=['POST'])
def api_validate_url():
    """Check that a URL can be executed"""
    try:
        data = request.get_json(silent=True)
        if not data or not isinstance(data, dict):
            return jsonify({'valid': False, 'error': 'No data provided'}), 400

        return jsonify(validate_url(str(data.get('url') or '')))

    except Exception as e:
        logger.exception("Failed to validate URL")
        return jsonify({'valid': False, 'error': f'Server error: {str(e)}'}), 500
