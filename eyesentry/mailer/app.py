"""
Flask application serving the email endpoint. `api/index.py` exposes the
result of `create_app()` to the Vercel Python runtime.
"""

from __future__ import annotations

import json
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, request

from eyesentry.config import Settings, configure_logging
from eyesentry.mailer.handler import CORS_HEADERS, EmailSender, ResendSender, handle_email_request

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(settings: Optional[Settings] = None, sender: Optional[EmailSender] = None) -> Flask:
    if settings is None:
        load_dotenv()
        settings = Settings.from_env()
    configure_logging(settings.log_level)
    if sender is None:
        sender = ResendSender(settings.resend_api_key, settings.email_from)

    app = Flask(__name__)
    app.config["EMAIL_SENDER"] = sender

    # Covers responses Flask builds itself, e.g. 405 for methods outside ALL_METHODS
    @app.after_request
    def add_cors_header(response: Response) -> Response:
        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    # OPTIONS is listed explicitly so Flask hands preflight requests to the view
    @app.route("/api/email", methods=ALL_METHODS)
    def send_email() -> Response:
        result = handle_email_request(
            request.method,
            request.get_data(),
            app.config["EMAIL_SENDER"],
        )
        body = json.dumps(result.payload, default=str) if result.payload is not None else None
        return Response(
            body,
            status=result.status,
            headers=result.headers,
            mimetype="application/json" if body is not None else None,
        )

    return app
