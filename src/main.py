import logging
from datetime import datetime

from flask import Flask, jsonify

from api.code_gen import LANGUAGES
from blueprints.codegen import codegen_bp
from blueprints.curl import curl_bp
from blueprints.request_client import request_bp
from config.settings import get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

log_handler = logging.StreamHandler()
log_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level='INFO'):
    """Configure root logging with a single stream handler."""
    root = logging.getLogger()
    if log_handler not in root.handlers:
        root.addHandler(log_handler)

    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        logger.warning("Unknown log level %s, using INFO", level)
        resolved = logging.INFO
    root.setLevel(resolved)


settings = get_settings()
configure_logging(settings['logging'].get('level', 'INFO'))

app = Flask(__name__)
app.register_blueprint(curl_bp)
app.register_blueprint(codegen_bp)
app.register_blueprint(request_bp)

@app.route('/health')
def health():
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'languages_count': len(LANGUAGES)
    })

if __name__ == '__main__':
    server = settings['server']
    app.run(host=server.get('host', '127.0.0.1'), port=server.get('port', 8000), debug=True)
