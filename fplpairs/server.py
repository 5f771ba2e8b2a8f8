"""JSON HTTP API for the pairs league.

Routes (the ``/api`` prefix is optional):
    GET  /api/gw/<gw>            -> ranked team scores for the gameweek
    GET  /api/pairs              -> current team -> entries resolution
    POST /api/pairs/refresh      -> refetch standings and rebuild pairs
    GET  /api/captains/<gw>      -> captains for the gameweek
    PUT  /api/captains/<gw>      -> replace captains (body: team name -> entry id)
    POST /api/captains/<gw>      -> merge captains into the stored ones
    GET  /api/abbreviations      -> team name -> squad prefix
    GET  /api/league             -> league directory (manager, entry id, squad)
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlparse

from .fpl_client import FPLAPIError
from .scorer import MiniLeagueScorer
from .validators import parse_gameweek, validate_captain_selection, validate_gameweek

logger = logging.getLogger('fplpairs.server')

MAX_BODY_BYTES = 64 * 1024


class MiniLeagueHTTPServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, server_address, scorer: MiniLeagueScorer):
        self.scorer = scorer
        super().__init__(server_address, MiniLeagueRequestHandler)


class MiniLeagueRequestHandler(BaseHTTPRequestHandler):
    server: MiniLeagueHTTPServer

    @property
    def scorer(self) -> MiniLeagueScorer:
        return self.server.scorer

    def _route(self) -> list[str]:
        parts = [part for part in urlparse(self.path).path.split('/') if part]
        if parts and parts[0] == 'api':
            parts = parts[1:]
        return parts

    def do_OPTIONS(self):
        """Handle CORS preflight."""
        self.send_response(204)
        self._send_cors_headers()
        self.send_header('Access-Control-Max-Age', '86400')
        self.send_header('Content-Length', '0')
        self.end_headers()

    def do_GET(self):
        self._dispatch('GET')

    def do_POST(self):
        self._dispatch('POST')

    def do_PUT(self):
        self._dispatch('PUT')

    def _dispatch(self, method: str):
        parts = self._route()
        if len(parts) == 2 and parts[0] == 'gw':
            actions = {'GET': lambda: self._get_gameweek(parts[1])}
        elif parts == ['pairs']:
            actions = {'GET': lambda: self._send_pairs(self.scorer.get_pairs())}
        elif parts == ['pairs', 'refresh']:
            actions = {'POST': lambda: self._send_pairs(self.scorer.refresh_pairs())}
        elif len(parts) == 2 and parts[0] == 'captains':
            actions = {
                'GET': lambda: self._get_captains(parts[1]),
                'PUT': lambda: self._set_captains(parts[1], merge=False),
                'POST': lambda: self._set_captains(parts[1], merge=True),
            }
        elif parts == ['abbreviations']:
            actions = {'GET': lambda: self._send_json(200, self.scorer.abbreviations())}
        elif parts == ['league']:
            actions = {'GET': self._get_league}
        else:
            return self._send_json(404, {'error': 'Not found'})

        action = actions.get(method)
        if action is None:
            return self._send_json(405, {'error': f'Method {method} not allowed'})

        try:
            action()
        except FPLAPIError as e:
            logger.error(f'Upstream failure on {method} {self.path}: {e}')
            self._send_json(502, {'error': f'FPL API unavailable: {e}'})
        except Exception as e:
            logger.exception(f'Unhandled error on {method} {self.path}')
            self._send_json(500, {'error': str(e)})

    def _get_gameweek(self, raw_gw: str):
        errors = validate_gameweek(raw_gw)
        if errors:
            return self._send_json(400, {'error': errors[0]})
        return self._send_json(200, self.scorer.gameweek_snapshot(parse_gameweek(raw_gw)))

    def _send_pairs(self, pairs):
        return self._send_json(200, [team.as_dict() for team in pairs])

    def _get_captains(self, raw_gw: str):
        errors = validate_gameweek(raw_gw)
        if errors:
            return self._send_json(400, {'error': errors[0]})
        return self._send_json(200, self.scorer.captains.get(parse_gameweek(raw_gw)))

    def _set_captains(self, raw_gw: str, merge: bool):
        errors = validate_gameweek(raw_gw)
        if errors:
            return self._send_json(400, {'error': errors[0]})

        try:
            body = self._read_json_body()
        except ValueError as e:
            return self._send_json(400, {'error': str(e)})

        errors = validate_captain_selection(body, self.scorer.team_names)
        if errors:
            return self._send_json(400, {'error': '; '.join(errors)})

        gw = parse_gameweek(raw_gw)
        try:
            saved = self.scorer.captains.set(gw, body, merge=merge)
        except (OSError, ValueError) as e:
            logger.error(f'Failed to save captains for GW{gw}: {e}')
            return self._send_json(500, {'error': f'Failed to save captains: {e}'})
        return self._send_json(200, {'status': 'ok', 'captains': saved})

    def _get_league(self):
        entries = self.scorer.league_directory()
        return self._send_json(
            200,
            {
                'leagueId': self.scorer.config.league_id,
                'count': len(entries),
                'managers': [entry.as_dict() for entry in entries],
            },
        )

    def _read_json_body(self):
        content_length = int(self.headers.get('Content-Length') or 0)
        if content_length > MAX_BODY_BYTES:
            raise ValueError('Request body too large')
        body = self.rfile.read(content_length) if content_length else b''
        try:
            return json.loads(body.decode() or '{}')
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise ValueError('Invalid JSON body') from None

    def _send_cors_headers(self):
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, POST, PUT, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')

    def _send_json(self, status_code: int, data):
        """Send JSON response with CORS headers."""
        payload = json.dumps(data).encode()
        self.send_response(status_code)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(payload)))
        self.send_header('Cache-Control', 'no-store')
        self._send_cors_headers()
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        """Route access logs through the package logger."""
        logger.info('%s - %s', self.address_string(), format % args)


def serve(scorer: MiniLeagueScorer, host: str, port: int) -> None:
    """Run the API until interrupted."""
    httpd = MiniLeagueHTTPServer((host, port), scorer)
    logger.info(f'FPL pairs league server running on {host}:{httpd.server_port}')
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info('Shutting down')
    finally:
        httpd.server_close()
