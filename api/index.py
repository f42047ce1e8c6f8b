"""
Vercel serverless entry point for the email endpoint.

Vercel's Python runtime detects the module-level `app` WSGI callable.
"""

from eyesentry.mailer.app import create_app

app = create_app()
