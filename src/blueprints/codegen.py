import logging

from flask import Blueprint, request, jsonify
from api.code_gen import generate_code_snippet, get_languages, is_supported_language
from api.curl_parser import parse_curl, to_api_request
from api.models import ApiRequest

logger = logging.getLogger(__name__)

codegen_bp = Blueprint('codegen', __name__)

@codegen_bp.route('/api/codegen/languages', methods=['GET'])
def api_list_languages():
    """List the languages snippets can be generated for"""
    return jsonify({'success': True, 'languages': get_languages()})

@codegen_bp.route('/api/codegen/generate', methods=['POST'])
def api_generate_code():
    """Generate a client code snippet from a request or a cURL command"""
    try:
        data = request.get_json(silent=True)
        if not data or not isinstance(data, dict):
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        language = data.get('language', '')
        if not isinstance(language, str) or not is_supported_language(language):
            return jsonify({'success': False, 'error': f'Unsupported language: {language}'}), 400

        if isinstance(data.get('request'), dict):
            api_request = ApiRequest.from_dict(data['request'])
        elif isinstance(data.get('curl'), str) and data['curl'].strip():
            config = parse_curl(data['curl'])
            if not config.url:
                return jsonify({'success': False, 'error': 'Could not find URL in cURL command'}), 400
            api_request = to_api_request(config)
        else:
            return jsonify({'success': False, 'error': 'A request or cURL command is required'}), 400

        try:
            code = generate_code_snippet(language, api_request)
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        return jsonify({'success': True, 'language': language, 'code': code})

    except Exception as e:
        logger.exception("Failed to generate code snippet")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
