"""Identifier grammar for room aliases, rooms, and users.

Three identifier kinds share the ``{sigil}{localpart}:{server_name}`` shape:
- Room alias: ``#localpart:domain`` (human readable, bound in the directory)
- Room ID: ``!opaque:domain`` (assigned when the room is created)
- User ID: ``@localpart:domain`` (the authenticated caller)

The first colon always separates the localpart from the server name.
Server names may carry a port, so a localpart can never contain a colon.

INVARIANT: AliasId equality is exact on both parts (case-sensitive).
"""

from __future__ import annotations

import re
import secrets
import string

from pydantic import BaseModel

MAX_ID_BYTES = 255
ROOM_ID_LOCALPART_LENGTH = 18

_DNS_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"

ID_PATTERNS: dict[str, re.Pattern[str]] = {
    "server_name": re.compile(
        rf"^(?:\[[0-9A-Fa-f:.]{{2,45}}\]|{_DNS_LABEL}(?:\.{_DNS_LABEL})*)(?::\d{{1,5}})?$"
    ),
    "room": re.compile(r"^!([^:]+):(.+)$"),
    "user": re.compile(r"^@([\x21-\x39\x3b-\x7e]+):(.+)$"),
}

SIGILS: dict[str, str] = {
    "alias": "#",
    "room": "!",
    "user": "@",
}

# Whitespace, NUL and the domain separator are never valid in an alias localpart.
_FORBIDDEN_LOCALPART = re.compile(r"[:\x00\s]")


class InvalidAlias(ValueError):
    """Raised when an alias localpart or domain violates the identifier grammar."""


def validate_server_name(server_name: str) -> bool:
    """Check whether *server_name* is a hostname or IP literal with optional port.

    Hostnames are dot-separated DNS labels: 1 to 63 letters, digits or
    hyphens, never starting or ending with a hyphen.
    """
    if len(server_name) > MAX_ID_BYTES:
        return False
    return ID_PATTERNS["server_name"].fullmatch(server_name) is not None


def _validate_sigil_id(value: str, kind: str) -> bool:
    if len(value.encode("utf-8")) > MAX_ID_BYTES:
        return False
    match = ID_PATTERNS[kind].match(value)
    if match is None:
        return False
    return validate_server_name(match.group(2))


def validate_room_id(room_id: str) -> bool:
    """Check whether *room_id* is a well-formed ``!opaque:server`` room ID."""
    return _validate_sigil_id(room_id, "room")


def validate_user_id(user_id: str) -> bool:
    """Check whether *user_id* is a well-formed ``@localpart:server`` user ID."""
    return _validate_sigil_id(user_id, "user")


def generate_room_id(domain: str) -> str:
    """Generate a fresh room ID on *domain* with a random 18-letter localpart."""
    opaque = "".join(secrets.choice(string.ascii_letters) for _ in range(ROOM_ID_LOCALPART_LENGTH))
    return f"{SIGILS['room']}{opaque}:{domain}"


def check_localpart(localpart: str) -> None:
    """Raise :class:`InvalidAlias` unless *localpart* is a legal alias localpart.

    Any non-empty string is accepted except those containing a colon, NUL,
    or whitespace. Leading ``#`` characters are legal (bridged aliases).
    """
    if not localpart:
        raise InvalidAlias("Room alias localpart must not be empty")
    bad = _FORBIDDEN_LOCALPART.search(localpart)
    if bad is not None:
        raise InvalidAlias(f"Invalid character {bad.group(0)!r} in room alias localpart")


class AliasId(BaseModel):
    """A room alias scoped to a home domain.

    Build instances through :meth:`from_parts` or :meth:`parse`; both
    validate the grammar. Direct construction is reserved for values read
    back from the store, which were validated when first written.
    """

    model_config = {"frozen": True}

    localpart: str
    domain: str

    @classmethod
    def from_parts(cls, localpart: str, domain: str) -> AliasId:
        """Validate and build an alias from a bare localpart and domain."""
        check_localpart(localpart)
        if not validate_server_name(domain):
            raise InvalidAlias(f"Invalid server name in room alias: {domain!r}")
        alias = cls(localpart=localpart, domain=domain)
        if len(alias.canonical.encode("utf-8")) > MAX_ID_BYTES:
            raise InvalidAlias(f"Room alias exceeds {MAX_ID_BYTES} bytes")
        return alias

    @classmethod
    def parse(cls, text: str) -> AliasId:
        """Parse a canonical ``#localpart:domain`` string."""
        if not text.startswith(SIGILS["alias"]):
            raise InvalidAlias(f"Room alias must start with '#': {text!r}")
        localpart, sep, domain = text[1:].partition(":")
        if not sep:
            raise InvalidAlias(f"Room alias is missing the ':' delimiter: {text!r}")
        return cls.from_parts(localpart, domain)

    @property
    def canonical(self) -> str:
        return f"{SIGILS['alias']}{self.localpart}:{self.domain}"

    def __str__(self) -> str:
        return self.canonical


def parse_alias_token(token: str, domain: str) -> AliasId:
    """Normalize a request token into an :class:`AliasId` on *domain*.

    A token of the form ``#localpart:server`` is read as a full alias and
    must name *domain*. Anything else is taken as the bare localpart, so
    ``my_room`` and ``#my_room:example.org`` resolve to the same alias.
    """
    if token.startswith(SIGILS["alias"]) and ":" in token:
        alias = AliasId.parse(token)
        if alias.domain != domain:
            raise InvalidAlias(f"Room alias {alias} does not belong to {domain}")
        return alias
    return AliasId.from_parts(token, domain)
