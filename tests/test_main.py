import unittest
import json
import logging
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from main import app, configure_logging, log_handler

class TestMain(unittest.TestCase):
    def setUp(self):
        self.app = app.test_client()

    def test_health(self):
        response = self.app.get('/health')
        self.assertEqual(response.status_code, 200)
        data = json.loads(response.data)
        self.assertEqual(data['status'], 'healthy')
        self.assertIn('timestamp', data)
        self.assertEqual(data['languages_count'], 31)

    def test_blueprints_registered(self):
        self.assertIn('curl', app.blueprints)
        self.assertIn('codegen', app.blueprints)
        self.assertIn('request_client', app.blueprints)

    def test_parse_then_generate(self):
        parsed = self.app.post('/api/curl/parse', json={
            'command': "curl -u user:pass https://api.example.com/data"
        })
        self.assertEqual(parsed.status_code, 200)
        request = json.loads(parsed.data)['request']
        self.assertEqual(request['auth']['type'], 'basic')

        generated = self.app.post('/api/codegen/generate', json={
            'language': 'nodejs_axios',
            'curl': "curl -u user:pass https://api.example.com/data"
        })
        self.assertEqual(generated.status_code, 200)
        self.assertIn('"Authorization": "Basic dXNlcjpwYXNz"', json.loads(generated.data)['code'])

    def test_unknown_route(self):
        response = self.app.get('/api/does-not-exist')
        self.assertEqual(response.status_code, 404)

class TestConfigureLogging(unittest.TestCase):
    def setUp(self):
        self.root = logging.getLogger()
        self.original_level = self.root.level

    def tearDown(self):
        self.root.setLevel(self.original_level)

    def test_sets_level(self):
        configure_logging('debug')
        self.assertEqual(self.root.level, logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging('chatty')
        self.assertEqual(self.root.level, logging.INFO)

    def test_single_handler(self):
        configure_logging('INFO')
        configure_logging('INFO')
        handlers = [h for h in self.root.handlers if h is log_handler]
        self.assertEqual(len(handlers), 1)

if __name__ == '__main__':
    unittest.main()
