import pytest

from core.config import Config, ProxySettings
from ui import dashboard as dashboard_module
from ui import log_utils
from ui.dashboard import Dashboard


@pytest.fixture(autouse=True)
def _isolated_logs(tmp_path, monkeypatch):
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "proxy.log")
    return tmp_path


def test_counts_requests(_isolated_logs):
    dashboard = Dashboard(Config())

    dashboard.log_preflight("/")
    dashboard.log_static("/", reserved=True)
    dashboard.log_relay("GET", "https://example.com", 200, {}, elapsed_ms=5.0)
    dashboard.log_error("https://example.com", 504, "Upstream timeout")

    assert dashboard._request_count == {"relay": 1, "preflight": 1, "static": 1, "error": 1}
    log_text = (_isolated_logs / "proxy.log").read_text()
    assert "RELAY: GET https://example.com status=200" in log_text
    assert "ERROR: Upstream timeout" in log_text


def test_keeps_recent_relays_only():
    dashboard = Dashboard(Config())

    for i in range(15):
        dashboard.log_relay("GET", f"https://example.com/{i}", 200, {}, elapsed_ms=1.0)

    assert len(dashboard._relays) == 10
    assert dashboard._relays[0].target_url == "https://example.com/14"


def test_debug_writes_relay_log(monkeypatch):
    calls = []
    monkeypatch.setattr(
        dashboard_module,
        "write_relay_log",
        lambda *args, **kwargs: calls.append((args, kwargs)),
    )
    dashboard = Dashboard(Config(proxy=ProxySettings(debug=True)))

    dashboard.log_relay("POST", "https://example.com", 201, {"a": "b"}, elapsed_ms=3.0)

    assert calls == [(("POST", "https://example.com", 201, {"a": "b"}), {"elapsed_ms": 3.0})]


def test_layout_renders():
    dashboard = Dashboard(Config())
    dashboard.log_relay("GET", "https://example.com", 500, {}, elapsed_ms=1.0)
    dashboard.log_error("https://example.com", 500, "x" * 80)

    layout = dashboard._build_layout()

    assert layout["relays"] is not None
    assert layout["footer"] is not None
