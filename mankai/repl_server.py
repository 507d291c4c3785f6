"""
Simple TCP evaluation server for Mankai.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(+ 1 2)"}
- Response: {"ok": true, "result": "3"} or {"ok": false, "error": <rendered error>}

One Interpreter is shared by every client so that definitions persist across
requests; evaluation is serialized with a lock because the core is
single-threaded.
"""

from __future__ import annotations

import json
import logging
import socket
import threading
from typing import Tuple

from mankai.config import get_server_address, get_log_level
from mankai.errors import ScanError, ParseError, MankaiRuntimeError, render_error
from mankai.interpreter import Interpreter

logger = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None, interp: Interpreter | None = None):
        default_host, default_port = get_server_address()
        self.host = host if host is not None else default_host
        self.port = port if port is not None else default_port
        # Keep a single interpreter to maintain session state
        self.interp = interp if interp is not None else Interpreter()
        self._lock = threading.Lock()

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def handle_request(self, req: dict) -> dict:
        if req.get("cmd") != "eval":
            return {"ok": False, "error": f"Unknown cmd: {req.get('cmd')}"}
        code = req.get("code", "")
        if not isinstance(code, str):
            return {"ok": False, "error": "Invalid request: 'code' must be a string"}
        try:
            with self._lock:
                result = self.interp.eval(code)
        except (ScanError, ParseError, MankaiRuntimeError) as ex:
            logger.debug("evaluation failed: %s", ex.message)
            return {"ok": False, "error": render_error(ex)}
        return {"ok": True, "result": result.to_string() if result is not None else None}

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("client connected: %s", addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        req = json.loads(line.decode("utf-8"))
                        if not isinstance(req, dict):
                            raise ValueError("request must be a JSON object")
                    except ValueError as ex:
                        logger.warning("bad request from %s: %s", addr, ex)
                        resp = {"ok": False, "error": f"Invalid request: {ex}"}
                    else:
                        resp = self.handle_request(req)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.debug("client disconnected: %s", addr)


def main() -> None:
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
