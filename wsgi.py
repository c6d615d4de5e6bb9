"""
WSGI entry point for deployment (Gunicorn).
Importing the app opens the dashboard session for this worker.
"""
from leathercraft_hq.app import server  # noqa: F401
