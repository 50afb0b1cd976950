"""ServerUrl helper: rebuilds the scheme://host[:port] the request arrived on.

The helper reads a CGI-style environment snapshot (``HTTP_HOST``,
``SERVER_PORT``, ``HTTPS`` ...). :meth:`ServerUrl.environ_from_request`
builds one from a Starlette request.
"""

import re
from collections.abc import Mapping
from typing import Any

from starlette.requests import Request

from view_layer.helpers.base import AbstractHelper

_HOST_WITH_PORT = re.compile(r":\d+$")


def _int_or_none(value: Any) -> int | None:
    if value in (None, "", False):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ServerUrl(AbstractHelper):
    """Detect scheme, host and port and print the server URL.

    Proxy headers (``X-Forwarded-*``) are only honoured when ``use_proxy``
    is on.
    """

    def __init__(self, environ: Mapping[str, Any] | None = None, use_proxy: bool = False):
        super().__init__()
        self.environ: dict[str, Any] = dict(environ or {})
        self.use_proxy = use_proxy
        self._scheme: str | None = None
        self._host: str | None = None
        self._port: int | None = None
        self._port_detected = False

    @staticmethod
    def environ_from_request(request: Request) -> dict[str, Any]:
        """Build the environment snapshot from a Starlette request."""
        headers = request.headers
        environ: dict[str, Any] = {
            "REQUEST_URI": request.url.path + (f"?{request.url.query}" if request.url.query else ""),
        }
        if request.url.scheme in ("https", "wss"):
            environ["HTTPS"] = "on"
        server = request.scope.get("server")
        if server:
            environ["SERVER_NAME"], environ["SERVER_PORT"] = server[0], server[1]
        for header, key in (
            ("host", "HTTP_HOST"),
            ("x-forwarded-host", "HTTP_X_FORWARDED_HOST"),
            ("x-forwarded-port", "HTTP_X_FORWARDED_PORT"),
            ("x-forwarded-proto", "HTTP_X_FORWARDED_PROTO"),
        ):
            if header in headers:
                environ[key] = headers[header]
        return environ

    @classmethod
    def from_request(cls, request: Request, use_proxy: bool = False) -> "ServerUrl":
        return cls(cls.environ_from_request(request), use_proxy=use_proxy)

    def set_environ(self, environ: Mapping[str, Any]) -> "ServerUrl":
        """Replace the environment snapshot and forget anything detected from the old one."""
        self.environ = dict(environ)
        self._scheme = None
        self._host = None
        self._port = None
        self._port_detected = False
        return self

    def set_use_proxy(self, use_proxy: bool = False) -> "ServerUrl":
        self.use_proxy = bool(use_proxy)
        return self

    def __call__(self, request_uri: Any = None) -> str:
        """Return the server URL.

        Args:
            request_uri: ``True`` appends ``REQUEST_URI``, a string is appended
                as-is, anything else appends nothing
        """
        if request_uri is True:
            path = str(self.environ.get("REQUEST_URI", ""))
        elif isinstance(request_uri, str):
            path = request_uri
        else:
            path = ""
        return f"{self.scheme}://{self.host}{path}"

    # Scheme

    @property
    def scheme(self) -> str:
        if self._scheme is None:
            self._detect_scheme()
        return self._scheme  # type: ignore[return-value]

    def set_scheme(self, scheme: str) -> "ServerUrl":
        self._scheme = scheme
        return self

    def _is_reversed_proxy(self) -> bool:
        return str(self.environ.get("HTTP_X_FORWARDED_PROTO", "")).lower() == "https"

    def _detect_scheme(self) -> None:
        if self._set_scheme_from_proxy():
            return
        https = self.environ.get("HTTPS")
        if (
            https is True
            or str(https).lower() == "on"
            or str(self.environ.get("HTTP_SCHEME", "")).lower() == "https"
            or self.port == 443
            or self._is_reversed_proxy()
        ):
            self._scheme = "https"
            return
        self._scheme = "http"

    def _set_scheme_from_proxy(self) -> bool:
        if not self.use_proxy:
            return False
        if str(self.environ.get("SSL_HTTPS", "")).lower() in ("on", "1"):
            self._scheme = "https"
            return True
        scheme = str(self.environ.get("HTTP_X_FORWARDED_PROTO", "")).strip().lower()
        if not scheme:
            return False
        self._scheme = scheme
        return True

    # Port

    @property
    def port(self) -> int | None:
        if not self._port_detected:
            self._detect_port()
        return self._port

    def set_port(self, port: int | str | None) -> "ServerUrl":
        self._port = _int_or_none(port)
        self._port_detected = True
        return self

    def _detect_port(self) -> None:
        self._port_detected = True
        if self.use_proxy:
            forwarded = _int_or_none(self.environ.get("HTTP_X_FORWARDED_PORT"))
            if forwarded is not None:
                self._port = forwarded
                return
        server_port = _int_or_none(self.environ.get("SERVER_PORT"))
        if server_port is None:
            return
        self._port = 443 if self._is_reversed_proxy() else server_port

    # Host

    @property
    def host(self) -> str:
        if self._host is None:
            self._detect_host()
        return self._host or ""

    def set_host(self, host: str) -> "ServerUrl":
        """Set the host, appending the port unless it is the scheme default.

        A host that already carries a port is kept as-is, since the request
        reached us through port forwarding.
        """
        port = self.port
        scheme = self.scheme
        if port is None or (scheme == "http" and port == 80) or (scheme == "https" and port == 443):
            self._host = host
            return self
        if _HOST_WITH_PORT.search(host):
            self._host = host
            return self
        self._host = f"{host}:{port}"
        return self

    def _detect_host(self) -> None:
        if self._set_host_from_proxy():
            return

        http_host = self.environ.get("HTTP_HOST")
        if http_host:
            server_port = self.environ.get("SERVER_PORT")
            if server_port:
                port_suffix = f":{server_port}"
                if http_host.endswith(port_suffix):
                    self.set_host(http_host[: -len(port_suffix)])
                    return
            self.set_host(http_host)
            return

        if not self.environ.get("SERVER_NAME") or not self.environ.get("SERVER_PORT"):
            self._host = ""
            return
        self.set_host(str(self.environ["SERVER_NAME"]))

    def _set_host_from_proxy(self) -> bool:
        if not self.use_proxy:
            return False
        forwarded = str(self.environ.get("HTTP_X_FORWARDED_HOST", "") or "")
        if not forwarded:
            return False
        host = forwarded.split(",")[-1].strip()
        if not host:
            return False
        self.set_host(host)
        return True
