"""
URL transformation for the byfood.com URL service.
Pure functions only: no I/O, no logging, no shared state.
"""

import re
from typing import NamedTuple
from urllib.parse import urlsplit, urlunsplit, quote, unquote_to_bytes, SplitResult

from rewriter.core import DEFAULT_SCHEME, DOMAIN_SUFFIX, REDIRECT_HOST
from rewriter.models import Operation, TransformError, TransformErrorKind

# scheme ":" as in RFC 3986; a "scheme" followed only by digits is really host:port
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_HOST_PORT_RE = re.compile(r"^[A-Za-z0-9.-]+:\d+(?=[/?#]|$)")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
# Ports only need to be digits; range is not checked
_OPTIONAL_PORT_RE = re.compile(r"(:[0-9]*)?")

# Characters left untouched when re-escaping an already-escaped path
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
# Characters left untouched when escaping a decoded path
_DECODED_PATH_SAFE = "/$&+,:;=@-._~"


class ParsedURL(NamedTuple):
    parts: SplitResult
    # "scheme:rest" with no "//" authority, e.g. "http:byfood.com/food"
    no_authority: bool

    @property
    def opaque(self) -> bool:
        return self.no_authority and not self.parts.path.startswith("/")


def _invalid(detail: str) -> TransformError:
    return TransformError(TransformErrorKind.INVALID_URL, detail)


def _check_port(netloc: str) -> None:
    hostport = netloc.rpartition("@")[2]
    if "]" in hostport:
        port = hostport.rpartition("]")[2]
    else:
        colon = hostport.rfind(":")
        port = hostport[colon:] if colon != -1 else ""
    if not _OPTIONAL_PORT_RE.fullmatch(port):
        raise _invalid(f"invalid port {port!r}")


def split_url(raw_url: str) -> ParsedURL:
    """
    Parse a raw URL into scheme/netloc/path/query/fragment, remembering whether
    the input carried a "//" authority after its scheme.

    Scheme-less input such as "byfood.com/food" is read as host + path, and an
    empty scheme is defaulted to https. Raises TransformError(INVALID_URL) for
    anything that cannot be parsed as a URL.
    """
    if not raw_url or raw_url.startswith(":"):
        raise _invalid("missing protocol scheme")
    if _CONTROL_RE.search(raw_url):
        raise _invalid("control character in URL")
    if _BAD_ESCAPE_RE.search(raw_url):
        raise _invalid("invalid percent escape")

    scheme_match = _SCHEME_RE.match(raw_url)
    has_scheme = bool(scheme_match) and not _HOST_PORT_RE.match(raw_url)
    no_authority = False
    if has_scheme:
        candidate = raw_url
        no_authority = not raw_url[scheme_match.end():].startswith("//")
    elif raw_url.startswith("/"):
        candidate = raw_url
    else:
        first_segment = re.split(r"[/?#]", raw_url, maxsplit=1)[0]
        if ":" in first_segment and not _HOST_PORT_RE.match(raw_url):
            raise _invalid("first path segment cannot contain colon")
        candidate = "//" + raw_url

    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        raise _invalid(str(e))

    _check_port(parts.netloc)
    if any(c.isspace() for c in parts.netloc):
        raise _invalid("whitespace in host")

    if not parts.scheme:
        parts = parts._replace(scheme=DEFAULT_SCHEME)
    return ParsedURL(parts, no_authority)


def parse_url(raw_url: str) -> SplitResult:
    return split_url(raw_url).parts


def _trim_path(path: str) -> str:
    # Trailing slashes are judged on the decoded path; "/" alone is kept
    decoded = unquote_to_bytes(path)
    if decoded != b"/" and decoded.endswith(b"/"):
        return quote(decoded.rstrip(b"/"), safe=_DECODED_PATH_SAFE)
    return path


def _redirect_netloc(parts: SplitResult) -> str:
    userinfo, at, _ = parts.netloc.rpartition("@")
    return f"{userinfo}{at}{REDIRECT_HOST}"


def serialize_url(url: ParsedURL) -> str:
    parts = url.parts
    if url.opaque:
        path = parts.path
    else:
        path = quote(parts.path, safe=_PATH_SAFE)

    if url.no_authority and not parts.netloc:
        out = f"{parts.scheme}:{path}"
        if parts.query:
            out += f"?{parts.query}"
        if parts.fragment:
            out += f"#{parts.fragment}"
        return out
    return urlunsplit(parts._replace(path=path))


def transform(raw_url: str, operation: Operation) -> str:
    """
    FLOW: parse (default scheme) -> [canonical|all] drop query + fragment, trim
    trailing slashes -> [redirection|all] check byfood.com host, rewrite host to
    www.byfood.com, lower-case the whole URL -> otherwise serialize unchanged.

    Canonical-only output keeps its original case; redirection output is fully
    lower-cased, including path and query. The domain check runs on host:port,
    so any explicit port fails it.
    """
    url = split_url(raw_url)
    parts = url.parts

    if operation.cleans:
        path = parts.path if url.opaque else _trim_path(parts.path)
        parts = parts._replace(query="", fragment="", path=path)

    if operation.redirects:
        hostport = parts.netloc.rpartition("@")[2].lower()
        if not hostport.endswith(DOMAIN_SUFFIX):
            raise TransformError(TransformErrorKind.NOT_BYFOOD_DOMAIN, hostport)
        parts = parts._replace(netloc=_redirect_netloc(parts))
        return serialize_url(url._replace(parts=parts)).lower()

    return serialize_url(url._replace(parts=parts))
