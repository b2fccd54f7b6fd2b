"""The extension shell: route query encoding, host identity and the viewport element."""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_ACCOUNT_ID = "akaia.near"
DEFAULT_APP_ID = ""
VIEWPORT_STYLE = "width: 100%; height: 100%;"

_log = logging.getLogger(__name__)

_SIMPLE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


class InvalidHostError(ValueError):
    """The host name does not map to a NEAR account."""

    def __init__(self, hostname: str) -> None:
        super().__init__(f"Invalid URL: {hostname!r}")
        self.hostname = hostname


@dataclass(frozen=True)
class ShellIdentity:
    """The NEAR account that owns the shell and the app it shows, if any."""

    account_id: str = DEFAULT_ACCOUNT_ID
    app_id: str = DEFAULT_APP_ID


def _debug_quote(text: str) -> str:
    parts = []
    for char in text:
        if char in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[char])
        elif not char.isprintable():
            parts.append(f"\\u{{{ord(char):x}}}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


def route_query_json(query: Mapping[str, str]) -> str:
    """Encode the route's query parameters as a JSON-style object of quoted strings."""
    pairs = (f"{_debug_quote(key)}:{_debug_quote(value)}" for key, value in query.items())
    return "{" + ",".join(pairs) + "}"


def identity_for_hostname(hostname: str) -> ShellIdentity:
    """Work out the account and app id from the host the shell is served on."""
    segments = hostname.split(".")
    if len(segments) == 1:
        return ShellIdentity(account_id=f"{segments[0]}.near")
    if len(segments) == 2:
        return ShellIdentity(account_id=f"{segments[0]}.{segments[1]}.near")
    if len(segments) == 3:
        return ShellIdentity(
            account_id=f"{segments[1]}.{segments[2]}.near",
            app_id=segments[0],
        )
    raise InvalidHostError(hostname)


def render_extension_shell(
    route: str,
    query: Mapping[str, str] | str,
    props: str,
    hostname: str | None = None,
) -> str:
    """Render the ``akaia-app`` element that hosts an extension."""
    query_json = query if isinstance(query, str) else route_query_json(query)

    identity = ShellIdentity()
    if hostname is not None:
        try:
            identity = identity_for_hostname(hostname)
        except InvalidHostError:
            _log.error("Invalid URL")

    attributes = {
        "account_id": identity.account_id,
        "app_id": identity.app_id,
        "route_path": route,
        "route_query": query_json,
        "props": props,
        "style": VIEWPORT_STYLE,
    }
    rendered = " ".join(
        f'{name}="{html.escape(value, quote=True)}"' for name, value in attributes.items()
    )
    return f"<akaia-app {rendered}></akaia-app>"