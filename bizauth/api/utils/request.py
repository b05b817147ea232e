from typing import Iterable

from fastapi import Request

UNKNOWN = "unknown"


def get_client_ip(request: Request, trusted_proxies: Iterable[str] = ()) -> str:
    """
    Client address used for rate limiting and audit events.

    Forwarding headers are honoured only when the socket peer is one of
    trusted_proxies; then the order is the first X-Forwarded-For entry,
    X-Real-IP, Remote-Addr header. Otherwise the socket peer is the
    client. Without a peer the address is "unknown".
    """
    peer = request.client.host if request.client and request.client.host else None

    if peer is not None and peer in trusted_proxies:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            first = forwarded_for.split(",")[0].strip()
            if first:
                return first

        for header in ("x-real-ip", "remote-addr"):
            value = request.headers.get(header)
            if value and value.strip():
                return value.strip()

    return peer or UNKNOWN


def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent") or UNKNOWN
