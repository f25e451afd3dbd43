"""Flask app for the standalone server: login, callback and stats routes."""

from __future__ import annotations

import logging

import requests
from flask import Flask, jsonify, redirect, request
from flask_cors import CORS
from markupsafe import escape

from .errors import ClientInputError, ConsentError, MissingConfigurationError, ProviderError
from .spotify import AuthorizationCodeGrant, SpotifyClient, build_authorize_url
from .stats import build_stats_response

logger = logging.getLogger(__name__)

CONFIRMATION_PAGE = (
    "<h2>Spotify connected.</h2>"
    "<p>Copy this into your .env as <code>SPOTIFY_REFRESH_TOKEN</code>:</p>"
    "<pre>{refresh_token}</pre>"
)


def _read_callback_code(args) -> str:
    error = args.get("error")
    if error:
        raise ClientInputError(f"Spotify auth error: {error}")
    code = args.get("code")
    if not code:
        raise ClientInputError("Missing authorization code.")
    return code


def create_app(settings, session=None) -> Flask:
    """Wire the routes to ``settings``; ``session`` replaces the ``requests`` session.

    One client, and so one connection pool, serves every request of the app.
    """
    app = Flask(__name__)
    CORS(app, send_wildcard=True)

    client = SpotifyClient(settings.credentials, session=session)

    @app.route("/")
    def home():
        return "Backend is running!"

    @app.route("/auth/login")
    @app.route("/auth/spotify/login")
    def login():
        try:
            settings.require("SPOTIFY_CLIENT_ID", "SPOTIFY_REDIRECT_URI")
        except MissingConfigurationError as exc:
            return str(exc), 503
        return redirect(build_authorize_url(settings.client_id, settings.redirect_uri))

    @app.route("/auth/callback")
    @app.route("/auth/spotify/callback")
    def callback():
        try:
            code = _read_callback_code(request.args)
        except ClientInputError as exc:
            return str(escape(str(exc))), 400

        try:
            settings.require("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "SPOTIFY_REDIRECT_URI")
        except MissingConfigurationError as exc:
            return str(exc), 503

        try:
            token = client.exchange(AuthorizationCodeGrant(code, settings.redirect_uri))
            if not token.refresh_token:
                raise ConsentError("No refresh token returned. Re-authorize and ensure consent was granted.")
        except ConsentError as exc:
            return str(exc), 500
        except (ProviderError, requests.RequestException) as exc:
            logger.error("Authorization code exchange failed: %s", exc)
            return f"Failed to exchange code: {escape(str(exc))}", 500

        logger.info("Authorization complete, refresh token issued")
        return CONFIRMATION_PAGE.format(refresh_token=escape(token.refresh_token))

    @app.route("/stats")
    @app.route("/api/spotify/stats")
    def stats():
        body, status = build_stats_response(settings, client)
        return jsonify(body), status

    return app
