from lunch.utilities import network


def test_loopback_bind_only_lists_localhost(monkeypatch):
    monkeypatch.setattr(network, "get_local_ip", lambda: "192.168.1.20")
    assert network.server_urls("127.0.0.1", 8000) == ["http://localhost:8000"]


def test_wildcard_bind_adds_lan_url(monkeypatch):
    monkeypatch.setattr(network, "get_local_ip", lambda: "192.168.1.20")
    assert network.server_urls("0.0.0.0", 8000) == ["http://localhost:8000", "http://192.168.1.20:8000"]


def test_wildcard_bind_without_lan(monkeypatch):
    monkeypatch.setattr(network, "get_local_ip", lambda: "127.0.0.1")
    assert network.server_urls("0.0.0.0", 9000) == ["http://localhost:9000"]


def test_explicit_host_is_listed():
    assert network.server_urls("10.0.0.5", 8000) == ["http://localhost:8000", "http://10.0.0.5:8000"]
