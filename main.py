from fastapi import FastAPI, HTTPException
from contextlib import asynccontextmanager
from dataclasses import asdict
import logging
import os
from dotenv import load_dotenv

from bootstrap import bootstrap, log_level, summary
from metadata import IMDS_BASE

# Load environment variables from .env file
load_dotenv()

META_ENDPOINT = os.environ.get("ATHENZ_SIA_META_ENDPOINT", IMDS_BASE)
CONFIG_FILE = os.environ.get("ATHENZ_SIA_CONFIG_FILE", "/etc/sia/sia_config")
USE_REGIONAL_STS = os.environ.get("ATHENZ_SIA_REGIONAL_STS", "false").lower() == "true"
LOG_LEVEL = log_level()

logging.basicConfig(level=LOG_LEVEL)
log = logging.getLogger("sia-agent")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fail closed: a bootstrap error aborts startup
    app.state.result = bootstrap(META_ENDPOINT, CONFIG_FILE, USE_REGIONAL_STS)
    log.info("Bootstrap complete for %s", app.state.result.account.name)
    yield


app = FastAPI(lifespan=lifespan)


def _result():
    result = getattr(app.state, "result", None)
    if result is None:
        raise HTTPException(status_code=503, detail="Bootstrap has not completed")
    return result


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


# /identity and /config are unauthenticated; the agent binds to localhost only.
@app.get("/identity")
def identity():
    res = summary(_result())
    return {k: res[k] for k in ("accountId", "region", "instanceId", "pendingTime", "taskId", "document", "signature")}


@app.get("/config")
def config():
    result = _result()
    account = asdict(result.account)
    account["name"] = result.account.name
    return {"config": asdict(result.config), "account": account}
