import json
import logging
import os
from typing import Callable, Mapping

import requests
from pydantic import ValidationError

from arn import parse_task_arn
from errors import ArnError, EvidenceUnavailable
from metadata import get_data
from models import IdentityEvidence, InstanceIdentityDocument

DOCUMENT_PATH = "/latest/dynamic/instance-identity/document"
SIGNATURE_PATH = "/latest/dynamic/instance-identity/pkcs7"
ECS_METADATA_FILE_ENV = "ECS_CONTAINER_METADATA_FILE"

log = logging.getLogger("sia-identity")


def fetch_identity_evidence(
    meta_endpoint: str, fetch: Callable[[str, str], bytes] = get_data
) -> IdentityEvidence:
    """Fetch the signed instance identity document.

    The document is only returned together with its PKCS7 signature; if
    either one cannot be fetched the call fails with EvidenceUnavailable.
    """
    try:
        document = fetch(meta_endpoint, DOCUMENT_PATH)
        signature = fetch(meta_endpoint, SIGNATURE_PATH)
    except requests.RequestException as e:
        raise EvidenceUnavailable(f"unable to fetch instance identity from {meta_endpoint}: {e}") from e

    try:
        doc = InstanceIdentityDocument.model_validate_json(document)
    except ValidationError as e:
        raise EvidenceUnavailable(f"unable to parse instance identity document: {e}") from e

    return IdentityEvidence(
        document=document,
        signature=signature,
        account_id=doc.account_id,
        instance_id=doc.instance_id,
        region=doc.region,
        pending_time=doc.pending_time,
    )


def fetch_container_task_id(environ: Mapping[str, str] = os.environ) -> str:
    """Return the ECS task id when running as ECS on EC2, otherwise ""."""
    path = environ.get(ECS_METADATA_FILE_ENV, "")
    if not path:
        log.info("Not ECS on EC2 instance")
        return ""

    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
    except OSError as e:
        log.warning("Unable to read ECS on EC2 instance metadata: %s - %s", path, e)
        return ""
    except ValueError as e:
        log.warning("Unable to parse ECS on EC2 instance metadata: %s - %s", path, e)
        return ""

    if not isinstance(doc, dict):
        log.warning("Unable to parse ECS on EC2 instance metadata: %s - not an object", path)
        return ""

    task_arn = doc.get("TaskARN") or ""
    try:
        return parse_task_arn(task_arn).task_id
    except (ArnError, AttributeError) as e:
        log.warning("Unable to parse ECS on EC2 task id: %s - %s", task_arn, e)
        return ""
