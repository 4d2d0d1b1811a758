from __future__ import annotations

import json
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from threading import Thread
from typing import Any, Callable, Dict, Mapping, Optional, Protocol
from urllib.parse import urlparse

from tyre_twin.dashboard.page import CONTROL_PAGE_HTML
from tyre_twin.dashboard.state import DashboardState

# Photos arrive base64-encoded inside the JSON body.
MAX_BODY_BYTES = 16 * 1024 * 1024

Route = Callable[[Dict[str, Any]], Any]


class TwinControls(Protocol):
    def update_params(self, changes: Mapping[str, Any]) -> Dict[str, Any]: ...

    def update_properties(self, changes: Mapping[str, Any]) -> Dict[str, Any]: ...

    def set_simulation_speed(self, multiplier: float) -> float: ...

    def set_forecast_calibration(self, calibration: float) -> float: ...

    def reset(self) -> Dict[str, Any]: ...

    def inject(self, overrides: Mapping[str, Any]) -> Dict[str, Any]: ...

    def request_analysis(self, image: str) -> None: ...


class DashboardServer:
    """Serves the control page, the polled state snapshot and the JSON control endpoints."""

    def __init__(self, state: DashboardState, controls: TwinControls, host: str, port: int) -> None:
        self.state = state
        self.controls = controls
        self.host = host
        self.port = port
        self._server: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[Thread] = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def _routes(self) -> Dict[str, Route]:
        controls = self.controls

        def analyze(body: Dict[str, Any]) -> Dict[str, Any]:
            controls.request_analysis(str(body["image"]))
            return {"status": "analyzing"}

        return {
            "/api/params": lambda body: {"params": controls.update_params(body)},
            "/api/properties": lambda body: {"props": controls.update_properties(body)},
            "/api/speed": lambda body: {"speed_multiplier": controls.set_simulation_speed(float(body["multiplier"]))},
            "/api/calibration": lambda body: {
                "forecast_calibration": controls.set_forecast_calibration(float(body["calibration"]))
            },
            "/api/reset": lambda body: {"data": controls.reset()},
            "/api/inject": lambda body: {"data": controls.inject(body)},
            "/api/analyze": analyze,
        }

    def start(self) -> None:
        if self._server is not None:
            return

        state = self.state
        routes = self._routes()

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:  # noqa: N802
                path = urlparse(self.path).path
                if path == "/api/state":
                    self._reply_json(state.snapshot())
                elif path in ("/", "/index.html"):
                    self._reply(CONTROL_PAGE_HTML.encode("utf-8"), "text/html; charset=utf-8")
                else:
                    self._reply_json({"error": f"not found: {path}"}, HTTPStatus.NOT_FOUND)

            def do_POST(self) -> None:  # noqa: N802
                path = urlparse(self.path).path
                route = routes.get(path)
                if route is None:
                    self._reply_json({"error": f"not found: {path}"}, HTTPStatus.NOT_FOUND)
                    return
                try:
                    result = route(self._read_body())
                except (KeyError, TypeError, ValueError) as exc:
                    self._reply_json({"error": str(exc)}, HTTPStatus.BAD_REQUEST)
                    return
                # Analysis finishes on a worker thread; the page polls for the verdict.
                self._reply_json(result, HTTPStatus.ACCEPTED if path == "/api/analyze" else HTTPStatus.OK)

            def _read_body(self) -> Dict[str, Any]:
                length = int(self.headers.get("Content-Length") or 0)
                if length > MAX_BODY_BYTES:
                    raise ValueError("request body too large")
                raw = self.rfile.read(length) if length > 0 else b""
                if not raw.strip():
                    return {}
                body = json.loads(raw.decode("utf-8"))
                if not isinstance(body, dict):
                    raise ValueError("request body must be a JSON object")
                return body

            def _reply_json(self, obj: Any, status: HTTPStatus = HTTPStatus.OK) -> None:
                self._reply(json.dumps(obj, ensure_ascii=True).encode("utf-8"), "application/json; charset=utf-8", status)

            def _reply(self, payload: bytes, content_type: str, status: HTTPStatus = HTTPStatus.OK) -> None:
                self.send_response(status)
                self.send_header("Content-Type", content_type)
                self.send_header("Cache-Control", "no-store")
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, format: str, *args: object) -> None:  # noqa: A003
                return

        self._server = ThreadingHTTPServer((self.host, self.port), Handler)
        # Port 0 binds an ephemeral port; report the real one.
        self.port = self._server.server_address[1]
        self._thread = Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        self._server = None
        self._thread = None
