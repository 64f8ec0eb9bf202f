"""
pytest configuration for cURL Workbench.
Isolates configuration from the user's home directory and provides the Flask
app, its test client and sample requests.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

# Keep the user's real config out of the test run
os.environ.setdefault('CURL_WORKBENCH_CONFIG_DIR', tempfile.mkdtemp(prefix='curl-workbench-test-'))


@pytest.fixture
def app():
    """Flask application in testing mode."""
    from main import app as flask_app
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def sample_curl():
    return (
        "curl -X POST 'https://api.example.com/users?page=2&limit=10' \\\n"
        "  -H 'Content-Type: application/json' \\\n"
        "  -H 'Authorization: Bearer abc123' \\\n"
        "  -H 'Accept: application/json' \\\n"
        "  -d '{\"name\": \"John\"}'"
    )


@pytest.fixture
def sample_api_request():
    """A GET request with one enabled and one disabled header, as the code generator receives it."""
    return {
        'method': 'GET',
        'url': 'https://api.example.com/data',
        'headers': [
            {'key': 'Accept', 'value': 'application/json', 'enabled': True},
            {'key': 'X-Disabled', 'value': 'nope', 'enabled': False}
        ],
        'params': [],
        'auth': {'type': 'none'},
        'body_type': 'none',
        'body': ''
    }
