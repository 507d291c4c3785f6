import io
import json
import socket
import threading

import pytest

from mankai import repl
from mankai.errors import EnvironmentInvariantError
from mankai.interpreter import Interpreter
from mankai.repl_server import ReplServer
from mankai.types.function import NativeFunction


def run_repl(interp, text):
    stdout, stderr = io.StringIO(), io.StringIO()
    errors = repl.repl(interp, io.StringIO(text), stdout, stderr)
    return errors, stdout.getvalue().splitlines(), stderr.getvalue().splitlines()


# -----------------------------------------------------
# Line REPL
# -----------------------------------------------------

def test_repl_prints_each_result(interp):
    errors, out, err = run_repl(interp, '(+ 1 2)\n"hi"\n(list 1 true)\n(lambda! (x) x)\n')
    assert errors == 0
    assert out == ["3", '"hi"', "(1 true)", "<user-defined function>"]
    assert err == []


def test_repl_skips_blank_lines(interp):
    errors, out, err = run_repl(interp, "\n   \n; comment\n(* 2 3)\n")
    assert out == ["6"]


def test_repl_survives_errors(interp):
    errors, out, err = run_repl(interp, 'foo\n(set! foo 1)\n"open\n)\nfoo\n')
    assert errors == 3
    assert out == ["1", "1"]
    assert err == [
        "Runtime error: unbound symbol 'foo'",
        "Lexing error at 0: unfinished string",
        "Parsing error at ')': expected atom or list",
    ]


def test_repl_does_not_swallow_fatal_errors(interp):
    def explode(args):
        raise EnvironmentInvariantError("can't restrict the global environment layer")

    interp.env.define("explode", NativeFunction("explode", explode))
    with pytest.raises(EnvironmentInvariantError):
        run_repl(interp, "(explode)\n")


def test_repl_survives_runaway_recursion(interp):
    body = "(+ 0 " * 12 + "(f n)" + ")" * 12
    errors, out, err = run_repl(interp, f"(defun! f (n) {body})\n(f 0)\n(+ 1 2)\n")
    assert errors == 1
    assert out == ["<user-defined function>", "3"]
    assert err == ["Runtime error: maximum call depth of 100 exceeded"]


def test_repl_state_persists_between_lines(interp):
    errors, out, _ = run_repl(interp, "(defun! sq (x) (* x x))\n(sq 9)\n")
    assert errors == 0
    assert out == ["<user-defined function>", "81"]


def test_main_runs_with_prelude():
    stdout, stderr = io.StringIO(), io.StringIO()
    status = repl.main(io.StringIO("(sum (list 1 2 3))\n(car (list))\n"), stdout, stderr)
    assert status == 0
    assert stdout.getvalue() == "6\n"
    assert stderr.getvalue() == "Runtime error: 'car' can't apply to empty list\n"


def test_main_reports_a_broken_prelude(monkeypatch, tmp_path):
    (tmp_path / "broken.mk").write_text("(")
    monkeypatch.setenv("MANKAI_PRELUDE_PATH", str(tmp_path))
    stdout, stderr = io.StringIO(), io.StringIO()
    assert repl.main(io.StringIO(""), stdout, stderr) == 1
    assert stderr.getvalue().startswith("failed to load prelude: Parsing error")


# -----------------------------------------------------
# TCP server
# -----------------------------------------------------

@pytest.fixture
def server(interp):
    return ReplServer(host="127.0.0.1", port=0, interp=interp)


def test_server_defaults(monkeypatch, interp):
    monkeypatch.setenv("MANKAI_SERVER_HOST", "0.0.0.0")
    monkeypatch.setenv("MANKAI_SERVER_PORT", "9999")
    srv = ReplServer(interp=interp)
    assert (srv.host, srv.port) == ("0.0.0.0", 9999)


@pytest.mark.parametrize(
    "request_,response",
    [
        ({"cmd": "eval", "code": "(+ 1 2)"}, {"ok": True, "result": "3"}),
        ({"cmd": "eval", "code": ""}, {"ok": True, "result": None}),
        ({"cmd": "eval", "code": "foo"}, {"ok": False, "error": "Runtime error: unbound symbol 'foo'"}),
        ({"cmd": "eval", "code": 5}, {"ok": False, "error": "Invalid request: 'code' must be a string"}),
        ({"cmd": "quit"}, {"ok": False, "error": "Unknown cmd: quit"}),
    ]
)
def test_handle_request(server, request_, response):
    assert server.handle_request(request_) == response


def test_handle_request_keeps_session_state(server):
    server.handle_request({"cmd": "eval", "code": "(define! x 20)"})
    assert server.handle_request({"cmd": "eval", "code": "(+ x 1)"}) == {"ok": True, "result": "21"}


def test_handle_request_reports_runaway_recursion(server):
    server.handle_request({"cmd": "eval", "code": "(defun! spin (n) (+ 0 (+ 0 (spin n))))"})
    assert server.handle_request({"cmd": "eval", "code": "(spin 1)"}) == {
        "ok": False,
        "error": "Runtime error: maximum call depth of 100 exceeded",
    }
    assert server.handle_request({"cmd": "eval", "code": "(+ 1 2)"}) == {"ok": True, "result": "3"}


def test_handle_client_over_a_socket(server):
    ours, theirs = socket.socketpair()
    worker = threading.Thread(target=server._handle_client, args=(theirs, ("test", 0)))
    worker.start()
    with ours:
        ours.sendall(b'{"cmd": "eval", "code": "(set! y 2)"}\n\n')
        ours.sendall(b'{"cmd": "eval", "code": "(* y 21)"}\nnot json\n[1]\n')
        ours.shutdown(socket.SHUT_WR)
        reader = ours.makefile("r", encoding="utf-8")
        lines = [json.loads(line) for line in reader]
    worker.join(timeout=5)

    assert lines[0] == {"ok": True, "result": "2"}
    assert lines[1] == {"ok": True, "result": "42"}
    assert lines[2]["ok"] is False
    assert lines[2]["error"].startswith("Invalid request:")
    assert lines[3] == {"ok": False, "error": "Invalid request: request must be a JSON object"}
