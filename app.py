#!/usr/bin/env python3
"""
Main entry point for the cURL Workbench API server.
This file serves as the application launcher that imports and runs the Flask app from the src directory.
"""

import sys
import os
import argparse
import logging
from pathlib import Path

# Add the src directory to the Python path so we can import from it
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

# Now we can import the main Flask application
from main import app, settings

logger = logging.getLogger("curl_workbench")

if __name__ == '__main__':
    server = settings['server']

    # Parse command line arguments
    parser = argparse.ArgumentParser(description='cURL Workbench API Server')
    parser.add_argument('--port', '-p', type=int, default=server.get('port', 8000),
                       help='Port to run the server on (default from configuration)')
    parser.add_argument('--host', default=server.get('host', '127.0.0.1'),
                       help='Host to bind to (default from configuration)')
    parser.add_argument('--debug', action='store_true',
                       help='Run Flask in debug mode')
    args = parser.parse_args()

    # Change working directory to project root to ensure relative paths work correctly
    os.chdir(project_root)

    try:
        logger.info("Starting cURL Workbench on http://%s:%s", args.host, args.port)
        app.run(host=args.host, port=args.port, debug=args.debug)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
