import importlib
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

import main
from bootstrap import BootstrapResult
from errors import EvidenceUnavailable
from models import IdentityEvidence, ServiceConfig, ServiceConfigAccount

RESULT = BootstrapResult(
    evidence=IdentityEvidence(
        document=b"{}",
        signature=b"sig",
        account_id="123456789012",
        instance_id="i-1",
        region="us-west-2",
        pending_time=datetime(2024, 3, 5, 17, 21, 44, tzinfo=timezone.utc),
    ),
    task_id="",
    config=ServiceConfig(service="api", region="us-west-2"),
    account=ServiceConfigAccount(account="123456789012", domain="sports", service="api"),
)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "bootstrap", lambda *args: RESULT)
    with TestClient(main.app) as c:
        yield c


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_identity(client):
    j = client.get("/identity").json()
    assert j["accountId"] == "123456789012"
    assert j["instanceId"] == "i-1"
    assert j["pendingTime"] == "2024-03-05T17:21:44+00:00"
    assert j["signature"] == "c2ln"


def test_config(client):
    j = client.get("/config").json()
    assert j["account"]["name"] == "sports.api"
    assert j["config"]["service"] == "api"
    assert j["config"]["region"] == "us-west-2"


def test_startup_fails_closed(monkeypatch):
    def fail(*args):
        raise EvidenceUnavailable("unreachable")

    monkeypatch.setattr(main, "bootstrap", fail)
    with pytest.raises(EvidenceUnavailable):
        with TestClient(main.app):
            pass


def test_lowercase_log_level_imports(monkeypatch):
    monkeypatch.setenv("ATHENZ_SIA_LOG_LEVEL", "info")
    module = importlib.reload(main)
    assert module.LOG_LEVEL == "INFO"
