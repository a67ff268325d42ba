import json
import logging
import time
import urllib.parse

from flask import Flask, request, jsonify, abort, g, make_response
from flask_sock import Sock
from werkzeug.exceptions import HTTPException

from log.logger import log
from util.version import Version
from model.errors import CheckinError, InvalidInput, ParticipantNotFound

class HTTPError(Exception):
  def __init__(self, status, message=None, data=None):
    self.status = status
    self.message = message
    self.data = data
    super().__init__(self.message)

class WebService:
  def __init__(self, desk, listen_interface='127.0.0.1', port=8080):
    self.desk = desk
    self.listen_interface = listen_interface
    self.port = port
    self.app = Flask(__name__)
    # Disable Flask's default logging
    logging.getLogger('werkzeug').setLevel(logging.ERROR)
    self.sock = Sock(self.app)
    self.websocket_clients = set()
    self._setup_routes()

  def run(self):
    self.app.run(host=self.listen_interface, port=self.port, threaded=True)

  @staticmethod
  def ip():
    client_ip = request.remote_addr or ""
    is_private = client_ip.startswith(('10.', '192.168.', '127.')) or \
      any(client_ip.startswith(f"172.{n}.") for n in range(16, 32))

    x_real_ip = request.headers.get('X-Real-Ip')
    if is_private and x_real_ip:
      return x_real_ip
    return client_ip

  def logmsg(self, msg):
    return f"{WebService.ip()} {request.method} {request.path}: {msg}"

  def base_url(self):
    if self.desk.config.base_url:
      return self.desk.config.base_url

    proto = request.headers.get('X-Forwarded-Proto', request.scheme).split(',')[0].strip()
    host = request.headers.get('X-Forwarded-Host', request.host).split(',')[0].strip()
    return f"{proto}://{host}"

  def fail_request(self, status, message=None, data=None):
    raise HTTPError(status, message, data)

  def error_response(self, status, message, data=None):
    response = jsonify({
      "status": status,
      "error": {
        "message": message,
        "data": data,
      }
    })
    response.status_code = status
    return response

  def respond(self, response_obj, status=200):
    wrapped_response = jsonify({
      "status": status,
      "response": response_obj,
    })

    wrapped_response.status_code = status
    wrapped_response.mimetype = 'application/json'
    abort(wrapped_response)

  def handler_crashed(self, exc):
    log.error(self.logmsg(f"Handler crashed: {str(exc)}"), exception=exc)
    return self.error_response(500, "Internal error")

  def broadcast_to_websockets(self, message):
    closed_sockets = set()
    log.debug(f"Broadcasting message of type {message.get('type')} to {len(self.websocket_clients)} websocket clients")
    for ws in list(self.websocket_clients):
      try:
        ws.send(json.dumps(message))
      except Exception as exc:
        log.warn("Failed to send to websocket", exception=exc)
        closed_sockets.add(ws)

    self.websocket_clients -= closed_sockets

  def _setup_routes(self):
    @self.app.before_request
    def record_request_start_time():
      g.start_time = time.time()

    @self.app.after_request
    def log_request_info(response):
      if hasattr(g, 'start_time'):
        process_time = (time.time() - g.start_time) * 1000
      else:
        process_time = 0

      request_size = request.content_length or 0
      response_size = response.calculate_content_length() or 0
      log.debug(f"webreq {WebService.ip()} \"{request.method} {request.path}\" {response.status_code} {process_time:.1f}ms {request_size} {response_size}")
      return response

    @self.app.errorhandler(Exception)
    def handle_exception(exc):
      if isinstance(exc, HTTPError):
        return self.error_response(exc.status, exc.message, exc.data)
      elif isinstance(exc, (InvalidInput, ParticipantNotFound)):
        log.debug(self.logmsg(exc.message))
        return self.error_response(exc.status, exc.message, exc.data)
      elif isinstance(exc, CheckinError):
        log.error(self.logmsg(f"{exc.__class__.__name__}: {exc.message}"), exception=exc)
        return self.error_response(exc.status, exc.message)
      elif isinstance(exc, HTTPException):
        if exc.response is not None:
          # respond() aborts with a finished response
          return exc.response
        return self.error_response(exc.code, exc.description)
      else:
        return self.handler_crashed(exc)

    @self.app.route('/version')
    def version():
      return jsonify({'version': Version().hash()})

    @self.app.route('/card/<path:card_name>')
    def card_get(card_name):
      if not card_name.endswith('.png'):
        self.fail_request(404, "Not found")

      # flask has already percent-decoded the path once
      identifier = card_name[:-len('.png')].strip()
      if not identifier:
        self.fail_request(400, "Missing id")

      data = self.desk.render_badge(identifier, base_url=self.base_url())
      response = make_response(data)
      response.headers['Content-Type'] = 'image/png'
      response.headers['Content-Disposition'] = f'attachment; filename="card-{urllib.parse.quote(identifier, safe="")}.png"'
      response.headers['Cache-Control'] = 'no-store'
      return response

    @self.app.route('/attend', methods=['GET', 'POST'])
    def attend():
      identifier = request.values.get('pid', '')
      result = self.desk.confirm_attendance(identifier)

      if not result["already_marked"]:
        self.broadcast_to_websockets({"type": "attendance", "data": result})

      self.respond(result)

    @self.app.route('/participants', methods=['GET'])
    def participants_get():
      self.respond({"participants": self.desk.list_participants()})

    @self.sock.route('/ws')
    def monitor(ws):
      self.websocket_clients.add(ws)
      log.info(self.logmsg(f"WebSocket client connected, total clients: {len(self.websocket_clients)}"))
      try:
        while True:
          ws.receive()
      except Exception as exc:
        log.info(self.logmsg("WebSocket disconnected"), exception=exc)
      finally:
        self.websocket_clients.discard(ws)
        log.info(self.logmsg(f"WebSocket client disconnected, remaining clients: {len(self.websocket_clients)}"))
