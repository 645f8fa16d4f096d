#!/usr/bin/env python3
"""
AutoStudio - Application Entry Point
Run this file to start the development server
"""
import os
import sys
import socket

# Load environment variables
from dotenv import load_dotenv
load_dotenv()

from autostudio import create_app

# Create the application
app = create_app()


def is_port_in_use(port):
    """Check if a port is already in use"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex(('localhost', port)) == 0


def find_available_port(preferred_port=5000):
    """Find an available port, starting with the preferred one"""
    for port in [preferred_port, 5001, 5002, 8000, 8080]:
        if not is_port_in_use(port):
            return port
    return None


if __name__ == '__main__':
    host = os.environ.get('HOST', '0.0.0.0')
    preferred_port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_ENV', 'development') == 'development'

    port = find_available_port(preferred_port)
    if port is None:
        print("\n❌ ERROR: No available ports found!")
        print("   Specify a different port: PORT=8080 python run.py")
        sys.exit(1)

    if port != preferred_port:
        print(f"\n⚠️  Port {preferred_port} is in use. Using port {port} instead.\n")

    print(f"""
╔══════════════════════════════════════════════════════════════╗
║              AutoStudio                                      ║
╠══════════════════════════════════════════════════════════════╣
  📡 API:       http://localhost:{port}/api
  💚 Health:    http://localhost:{port}/health
  Environment: {'development' if debug else 'production'}

  Press Ctrl+C to stop
╚══════════════════════════════════════════════════════════════╝
    """)

    # The reloader would start a second process with its own scheduler
    app.run(host=host, port=port, debug=debug, use_reloader=False)
