"""
Tests for the command-line entry point.
"""

import socket
import subprocess
import sys
from pathlib import Path

import pytest

RUN = Path(__file__).resolve().parent.parent / "run.py"


def run_cli(*args):
    return subprocess.run([sys.executable, str(RUN), *args], capture_output=True,
                          text=True, timeout=30, cwd=RUN.parent)


class TestArguments:
    """Bad positional arguments exit non-zero with a usage message."""
    
    @pytest.mark.parametrize("args", [
        ["server"], ["server", "abc"], ["client", "localhost"], ["client", "localhost", "port"]])
    def test_usage_errors(self, args):
        result = run_cli(*args)
        assert result.returncode != 0
        assert "usage:" in result.stderr
    
    def test_invalid_board_options(self):
        result = run_cli("server", "0", "--rows", "3", "--cols", "3", "--win-len", "5")
        assert result.returncode != 0
        assert "win_len 5 cannot fit" in result.stderr

    def test_client_takes_board_options(self):
        """The client is checked against the same board rules before connecting."""
        result = run_cli("client", "127.0.0.1", "1", "--rows", "3", "--cols", "3", "--win-len", "5")
        assert result.returncode == 2
        assert "win_len 5 cannot fit" in result.stderr

    def test_help_lists_components(self):
        result = run_cli("--help")
        assert result.returncode == 0
        assert "server" in result.stdout and "client" in result.stdout
    
    def test_client_cannot_connect(self):
        """A refused connection is reported and exits with status 1."""
        sock = socket.socket()
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
        sock.close()
        result = run_cli("client", "127.0.0.1", str(port), "--timeout", "2",
                         "--debug_level", "none")
        assert result.returncode == 1
        assert "Error:" in result.stderr
