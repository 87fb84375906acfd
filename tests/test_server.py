import django.core.management

from stock_ledger import ledger, server
from stock_ledger.exceptions import StoreUnavailable


def test_exits_when_store_is_unreachable(monkeypatch):
    def unreachable(using="default"):
        raise StoreUnavailable("could not connect to server")

    started = []
    monkeypatch.setattr(ledger, "check_store", unreachable)
    monkeypatch.setattr(django.core.management, "call_command", lambda *a, **k: started.append(a))

    assert server.main([]) == 1
    assert started == []


def test_serves_on_requested_address(monkeypatch, tables):
    calls = []
    monkeypatch.setattr(ledger, "check_store", lambda using="default": None)
    monkeypatch.setattr(
        django.core.management, "call_command", lambda *a, **k: calls.append((a, k))
    )

    assert server.main(["--host", "127.0.0.1", "--port", "8123", "--create-schema"]) == 0
    assert calls == [
        (("runserver", "127.0.0.1:8123"), {"use_reloader": False, "use_threading": True})
    ]


def test_wsgi_application_is_importable():
    from stock_ledger.wsgi import application

    assert callable(application)
