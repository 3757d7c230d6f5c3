"""HTTP security headers applied to every response."""

from collections.abc import Iterable

from starlette.middleware.base import BaseHTTPMiddleware

from rencontre_repas.errors import internal_error_response

SELF = "'self'"

DEFAULT_SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def build_content_security_policy(
    style_hosts: Iterable[str] = (),
    script_hosts: Iterable[str] = (),
) -> str:
    """Build the Content-Security-Policy header value.

    Inline styles are allowed; scripts, images and connections are limited to
    the origin plus the given hosts (and ``data:`` URIs for images).
    """
    directives: dict[str, list[str]] = {
        "default-src": [SELF],
        "style-src": [SELF, "'unsafe-inline'", *style_hosts],
        "script-src": [SELF, *script_hosts],
        "img-src": [SELF, "data:"],
        "connect-src": [SELF],
        "base-uri": [SELF],
        "font-src": [SELF, "https:", "data:"],
        "form-action": [SELF],
        "frame-ancestors": [SELF],
        "object-src": ["'none'"],
        "script-src-attr": ["'none'"],
        "upgrade-insecure-requests": [],
    }
    return ";".join(" ".join([name, *sources]) for name, sources in directives.items())


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set the content security policy and hardening headers."""

    def __init__(self, app, content_security_policy: str, headers: dict[str, str] | None = None):
        super().__init__(app)
        self.headers = dict(DEFAULT_SECURITY_HEADERS if headers is None else headers)
        self.headers["Content-Security-Policy"] = content_security_policy

    async def dispatch(self, request, call_next):
        try:
            response = await call_next(request)
        except Exception as e:
            response = internal_error_response(request, e)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response
