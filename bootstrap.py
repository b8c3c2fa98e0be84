import base64
import json
import logging
import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

from errors import SIAError
from identity import fetch_container_task_id, fetch_identity_evidence
from metadata import IMDS_BASE
from models import IdentityEvidence, ServiceConfig, ServiceConfigAccount
from resolver import resolve_config

log = logging.getLogger("sia-bootstrap")


def log_level() -> str:
    return os.environ.get("ATHENZ_SIA_LOG_LEVEL", "INFO").strip().upper() or "INFO"


@dataclass(frozen=True)
class BootstrapResult:
    evidence: IdentityEvidence
    task_id: str
    config: ServiceConfig
    account: ServiceConfigAccount


def bootstrap(meta_endpoint: str, config_file: str, use_regional_sts: bool) -> BootstrapResult:
    """Collect identity evidence and resolve the service identity.

    Raises EvidenceUnavailable or ConfigResolutionFailed; nothing is
    returned unless both steps succeed.
    """
    evidence = fetch_identity_evidence(meta_endpoint)
    log.info(f"Instance {evidence.instance_id} in account {evidence.account_id}, region {evidence.region}")

    task_id = fetch_container_task_id()
    if task_id:
        log.info(f"ECS task id: {task_id}")

    config, account = resolve_config(
        config_file, meta_endpoint, use_regional_sts, evidence.region, evidence.account_id
    )
    return BootstrapResult(evidence=evidence, task_id=task_id, config=config, account=account)


def summary(result: BootstrapResult) -> dict:
    ev = result.evidence
    return {
        "accountId": ev.account_id,
        "region": ev.region,
        "instanceId": ev.instance_id,
        "pendingTime": ev.pending_time.isoformat() if ev.pending_time else None,
        "taskId": result.task_id,
        "document": base64.b64encode(ev.document).decode("ascii"),
        "signature": base64.b64encode(ev.signature).decode("ascii"),
        "service": result.account.name,
        "account": result.account.account,
    }


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=log_level())
    try:
        res = bootstrap(
            os.environ.get("ATHENZ_SIA_META_ENDPOINT", IMDS_BASE),
            os.environ.get("ATHENZ_SIA_CONFIG_FILE", "/etc/sia/sia_config"),
            os.environ.get("ATHENZ_SIA_REGIONAL_STS", "false").lower() == "true",
        )
    except SIAError as e:
        log.error("Bootstrap failed: %s", e)
        sys.exit(1)
    print(json.dumps(summary(res), indent=2))
