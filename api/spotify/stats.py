from http.server import BaseHTTPRequestHandler
import json
import logging

from dotenv import load_dotenv

from statsproxy.config import load_spotify_settings
from statsproxy.logging import configure_logging
from statsproxy.spotify import SpotifyClient
from statsproxy.stats import build_stats_response

load_dotenv()
configure_logging()

logger = logging.getLogger("statsproxy.serverless")


class handler(BaseHTTPRequestHandler):
    # requests session override; None means a fresh requests.Session per call
    session = None

    def do_GET(self):
        # Each invocation reads the environment again; nothing is kept between calls
        settings = load_spotify_settings(dotenv=False)
        try:
            with SpotifyClient(settings.credentials, session=self.session) as client:
                body, status = build_stats_response(settings, client)
        except Exception as e:
            logger.exception("Unexpected error in stats: %s", e)
            self.send_json_response({'error': 'Internal server error', 'details': str(e)}, 500)
            return
        self.send_json_response(body, status)

    def send_json_response(self, data, status_code):
        self.send_response(status_code)
        self.send_header('Content-type', 'application/json')
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.end_headers()
        self.wfile.write(json.dumps(data).encode('utf-8'))

    def do_OPTIONS(self):
        self.send_response(200)
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.end_headers()
