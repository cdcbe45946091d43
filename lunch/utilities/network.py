"""Addresses the API can be reached at, for the startup banner."""
import socket
from typing import List

# Any routable address works: connecting a UDP socket sends nothing
ROUTE_TARGET = ("10.255.255.255", 1)
LOOPBACK_HOSTS = ("127.0.0.1", "localhost", "::1")


def get_local_ip() -> str:
    """LAN address the OS would route outbound traffic from, or '127.0.0.1'."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        try:
            s.connect(ROUTE_TARGET)
            return str(s.getsockname()[0])
        except OSError:
            return "127.0.0.1"


def server_urls(host: str, port: int) -> List[str]:
    """URLs to print for a server bound to ``host``.

    A loopback bind is only reachable locally; any other bind also gets the
    LAN URL when one can be determined.
    """
    urls = [f"http://localhost:{port}"]
    if host in LOOPBACK_HOSTS:
        return urls
    if host not in ("0.0.0.0", "::"):
        urls.append(f"http://{host}:{port}")
        return urls
    local_ip = get_local_ip()
    if local_ip != "127.0.0.1":
        urls.append(f"http://{local_ip}:{port}")
    return urls
