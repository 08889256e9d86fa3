"""HTTP collection endpoint."""

from html import escape
from typing import Any, Callable, Iterable
from wsgiref.simple_server import make_server

from prometheus_client import CollectorRegistry, make_wsgi_app
from prometheus_client.exposition import ThreadingWSGIServer, _get_best_family, _SilentHandler

from ..errors import CollectionError, TransportError
from ..logging.config import get_collection_logger

logger = get_collection_logger(__name__)

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]

_LANDING_PAGE = """<html>
<head><title>Signal Exporter</title></head>
<body>
<h1>Signal Exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


def make_app(registry: CollectorRegistry, metrics_path: str = "/metrics") -> WSGIApp:
    """
    WSGI application serving the registry on metrics_path.

    The metrics path negotiates the OpenMetrics format through the Accept
    header. The root path serves a landing page; every other path is 404.
    """
    metrics_app = make_wsgi_app(registry)
    landing_page = _LANDING_PAGE.format(path=escape(metrics_path)).encode("utf-8")

    def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        path = environ.get("PATH_INFO") or "/"

        if path == metrics_path:
            try:
                return metrics_app(environ, start_response)
            except CollectionError as e:
                logger.error("Collection request failed",
                             signal_name=e.signal_name, error=str(e))
                start_response("500 Internal Server Error",
                               [("Content-Type", "text/plain; charset=utf-8")])
                return [f"collection failed: {e}\n".encode("utf-8")]

        if path == "/":
            start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
            return [landing_page]

        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]

    return app


def create_server(host: str, port: int, app: WSGIApp) -> ThreadingWSGIServer:
    """
    Bind a threading WSGI server, one thread per request.

    An empty host listens on every IPv4 interface. The address family is
    picked from the host the same way prometheus_client.start_http_server
    does it.

    Raises:
        TransportError: If the address cannot be resolved or bound
    """
    address = f"[{host}]:{port}" if ":" in host else f"{host}:{port}"

    class _Server(ThreadingWSGIServer):
        """ThreadingWSGIServer with the address family of this host"""

    try:
        _Server.address_family, bind_host = _get_best_family(host or "0.0.0.0", port)
        return make_server(bind_host, port, app,
                           server_class=_Server,
                           handler_class=_SilentHandler)
    except OSError as e:
        raise TransportError(
            f"Cannot listen on {address}: {e}",
            address=address,
        ) from e
