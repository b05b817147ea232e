from starlette.requests import Request

from bizauth.api.utils.request import get_client_ip, get_user_agent

PROXY = "10.0.0.5"


def make_request(headers, client=("192.168.1.50", 5000)):
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


def test_forwarding_headers_from_untrusted_peer_are_ignored():
    spoofed = {
        "X-Forwarded-For": "203.0.113.7",
        "X-Real-IP": "203.0.113.8",
        "Remote-Addr": "203.0.113.9",
    }

    assert get_client_ip(make_request(spoofed)) == "192.168.1.50"
    assert get_client_ip(make_request(spoofed), trusted_proxies=[PROXY]) == "192.168.1.50"


def test_forwarded_for_first_entry_wins_behind_trusted_proxy():
    request = make_request(
        {"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "10.0.0.2"},
        client=(PROXY, 5000),
    )

    assert get_client_ip(request, trusted_proxies=[PROXY]) == "203.0.113.7"


def test_real_ip_then_remote_addr_behind_trusted_proxy():
    real_ip = make_request({"X-Real-IP": "203.0.113.8"}, client=(PROXY, 5000))
    remote_addr = make_request({"Remote-Addr": "203.0.113.9"}, client=(PROXY, 5000))

    assert get_client_ip(real_ip, trusted_proxies=[PROXY]) == "203.0.113.8"
    assert get_client_ip(remote_addr, trusted_proxies=[PROXY]) == "203.0.113.9"


def test_trusted_proxy_without_headers_is_the_client():
    assert get_client_ip(make_request({}, client=(PROXY, 5000)), trusted_proxies=[PROXY]) == PROXY


def test_socket_peer_then_unknown():
    assert get_client_ip(make_request({})) == "192.168.1.50"
    assert get_client_ip(make_request({}, client=None)) == "unknown"
    assert get_client_ip(make_request({"X-Forwarded-For": "203.0.113.7"}, client=None)) == "unknown"


def test_user_agent():
    assert get_user_agent(make_request({"User-Agent": "Mozilla/5.0"})) == "Mozilla/5.0"
    assert get_user_agent(make_request({})) == "unknown"
