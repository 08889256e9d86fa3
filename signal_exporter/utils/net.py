"""Listen address parsing."""

from typing import Tuple


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a listen address into host and port.

    Accepts "host:port", ":port" (all interfaces) and "[v6-host]:port".

    Raises:
        ValueError: If the address has no valid port
    """
    if not isinstance(address, str):
        raise ValueError(f"invalid listen address: {address!r}")

    text = address.strip()
    if text.startswith("["):
        host, bracket, rest = text[1:].partition("]")
        if not bracket or not rest.startswith(":"):
            raise ValueError(f"invalid listen address: {address!r}")
        port_text = rest[1:]
    else:
        host, colon, port_text = text.rpartition(":")
        if not colon:
            raise ValueError(f"missing port in listen address: {address!r}")
        if ":" in host:
            raise ValueError(f"IPv6 hosts must be bracketed: {address!r}")

    if not port_text.isdigit() or not port_text.isascii():
        raise ValueError(f"invalid port in listen address: {address!r}")

    port = int(port_text)
    if port > 65535:
        raise ValueError(f"port out of range in listen address: {address!r}")

    return host, port
