import json

import pytest
import requests

DOCUMENT = {
    "accountId": "123456789012",
    "region": "us-west-2",
    "instanceId": "i-0abcd1234ef567890",
    "pendingTime": "2024-03-05T17:21:44Z",
    "availabilityZone": "us-west-2a",
}


class FakeMetadata:
    """Stands in for metadata.get_data: serves bytes by path, raises for missing paths."""

    def __init__(self, paths):
        self.paths = dict(paths)
        self.calls = []

    def __call__(self, meta_endpoint, path):
        self.calls.append((meta_endpoint, path))
        if path not in self.paths:
            raise requests.HTTPError(f"404 Not Found: {path}")
        return self.paths[path]


@pytest.fixture
def document_bytes() -> bytes:
    return json.dumps(DOCUMENT).encode()


@pytest.fixture
def clean_env(monkeypatch):
    for var in (
        "ECS_CONTAINER_METADATA_FILE",
        "ATHENZ_SIA_IAM_ROLE_ARN",
        "ATHENZ_SIA_SANDNS_WILDCARD",
        "ATHENZ_SIA_SANDNS_HOSTNAME",
        "ATHENZ_SIA_REGIONAL_STS",
        "ATHENZ_SIA_KEY_DIR",
        "ATHENZ_SIA_CERT_DIR",
        "ATHENZ_SIA_USER",
        "ATHENZ_SIA_GROUP",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def fake_metadata():
    return FakeMetadata
