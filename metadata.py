import logging
from typing import Optional

import requests

IMDS_BASE = "http://169.254.169.254"
TOKEN_PATH = "/latest/api/token"
TOKEN_TTL = "21600"  # seconds

log = logging.getLogger("sia-metadata")


def get_imds_token(meta_endpoint: str, timeout: Optional[float] = None) -> str:
    headers = {"X-aws-ec2-metadata-token-ttl-seconds": TOKEN_TTL}
    resp = requests.put(f"{meta_endpoint}{TOKEN_PATH}", headers=headers, timeout=timeout)
    resp.raise_for_status()
    return resp.text


def get_data(meta_endpoint: str, path: str, timeout: Optional[float] = None) -> bytes:
    """Fetch the raw body stored at ``path`` on the metadata endpoint.

    Uses an IMDSv2 session token when the endpoint hands one out and falls
    back to a plain IMDSv1 request otherwise. Network errors and non-2xx
    responses are raised as ``requests`` exceptions.
    """
    headers = {}
    try:
        headers["X-aws-ec2-metadata-token"] = get_imds_token(meta_endpoint, timeout)
    except requests.RequestException as e:
        log.debug("IMDSv2 token unavailable from %s, using IMDSv1: %s", meta_endpoint, e)

    resp = requests.get(f"{meta_endpoint}{path}", headers=headers, timeout=timeout)
    resp.raise_for_status()
    return resp.content
