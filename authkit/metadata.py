"""Client details taken from request metadata and the peer address."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union

GRPC_GATEWAY_USER_AGENT_HEADER = "grpcgateway-user-agent"
USER_AGENT_HEADER = "user-agent"
X_FORWARDED_FOR_HEADER = "x-forwarded-for"

HeaderValue = Union[str, Sequence[str]]


@dataclass
class Metadata:
    """User agent and client IP address of a caller."""

    user_agent: str = ""
    client_ip: str = ""


def _normalise(headers: Mapping[str, HeaderValue]) -> dict[str, list[str]]:
    normalised: dict[str, list[str]] = {}
    for name, value in headers.items():
        values = [value] if isinstance(value, str) else list(value)
        normalised.setdefault(name.lower(), []).extend(values)
    return normalised


def _split_host(address: str) -> str:
    """Return the host part of ``host:port``, or "" if the address is malformed."""
    if address.startswith("["):
        end = address.find("]")
        if end < 0 or address[end + 1 : end + 2] != ":":
            return ""
        return address[1:end]
    host, sep, _ = address.rpartition(":")
    if not sep or ":" in host:
        return ""
    return host


def extract_metadata(
    headers: Optional[Mapping[str, HeaderValue]] = None,
    peer_address: Optional[str] = None,
) -> Metadata:
    """Read the user agent and client IP from headers and the peer address.

    A plain ``user-agent`` wins over the gateway one, and the peer address,
    when known, wins over ``x-forwarded-for``.
    """
    result = Metadata()
    if headers is not None:
        md = _normalise(headers)
        for name in (GRPC_GATEWAY_USER_AGENT_HEADER, USER_AGENT_HEADER):
            if md.get(name):
                result.user_agent = md[name][0]
        if md.get(X_FORWARDED_FOR_HEADER):
            result.client_ip = md[X_FORWARDED_FOR_HEADER][0]

    if peer_address is not None:
        host = _split_host(peer_address)
        if host == "::1":
            host = "127.0.0.1"
        result.client_ip = host

    return result