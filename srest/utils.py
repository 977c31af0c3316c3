"""
SREST Utility Functions

Helper functions for the SREST listener.
"""

import errno
import socket


def check_port_available(host: str, port: int) -> bool:
    """
    Check if a port is available for binding.

    Args:
        host: Host address to check
        port: Port number to check

    Returns:
        True if port is available, False otherwise
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            return True
    except OSError:
        return False


def ensure_port_available(host: str, port: int) -> None:
    """
    Raise if ``port`` cannot be bound on ``host``.

    Port 0 always passes, the OS picks a free port.

    Raises:
        OSError: EADDRINUSE when the port is taken
    """
    if port and not check_port_available(host, port):
        raise OSError(errno.EADDRINUSE, f"Port {port} is already in use on {host}")
