from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from deflate.client import DeflateClient
from deflate.config import credentials_from_env, load_yaml, require_bool, settings_from_mapping
from deflate.credentials import MASK
from deflate.errors import AuthenticationError, ConfigurationError
from deflate.logger import get_logger


def env_flag(name: str, default: str = "0") -> bool:
    v = os.getenv(name, default).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class CompressJob:
    images: list[str]
    image_type: str
    wait: bool = True
    callback: Optional[str] = None
    custom: dict[str, Any] = field(default_factory=dict)


def validate_job(job: CompressJob, limit: Optional[int] = None) -> None:
    if not job.images:
        raise ConfigurationError("job.images must list at least one image")
    if not job.image_type:
        raise ConfigurationError("job.type must be set")
    if not job.wait and not job.callback:
        raise ConfigurationError("job.callback is required when job.wait is false")
    if limit is not None and len(job.images) > limit:
        raise ConfigurationError(f"job.images exceeds the account limit ({limit})")


def job_from_mapping(data: dict[str, Any]) -> CompressJob:
    images = data.get("images") or []
    if isinstance(images, str):
        images = [images]
    return CompressJob(
        images=[str(i) for i in images],
        image_type=str(data.get("type", "")),
        wait=require_bool(data, "wait", True, prefix="job."),
        callback=data.get("callback") or None,
        custom=dict(data.get("custom") or {}),
    )


def request_body(job: CompressJob, auth: dict[str, str]) -> dict[str, Any]:
    """The body the client sends to the deflate action for this job."""
    body: dict[str, Any] = {"auth": auth}
    if len(job.images) == 1:
        body["image"] = job.images[0]
    else:
        body["images"] = list(job.images)
    body["type"] = job.image_type
    body["wait"] = job.wait
    if job.callback:
        body["callback"] = job.callback
    if job.custom:
        body["custom"] = job.custom
    return body


def preview_auth() -> dict[str, str]:
    try:
        return credentials_from_env().masked_auth()
    except ConfigurationError:
        return {"api_key": "<unset>", "api_secret": MASK}


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Deflate example: compress images (safe dry-run by default).")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    args = parser.parse_args(argv)

    load_dotenv()

    cfg = load_yaml(Path(args.config))

    log_level = str(cfg.get("app", {}).get("log_level", "INFO"))
    log = get_logger(level=log_level)

    cfg_dry_run = require_bool(cfg.get("app", {}), "dry_run", True, prefix="app.")
    env_dry_run = env_flag("DRY_RUN", "1")
    dry_run = cfg_dry_run and env_dry_run  # both must allow live requests

    settings = settings_from_mapping(cfg)
    job = job_from_mapping(cfg.get("job", {}))
    validate_job(job)

    log.info("MODE=%s", "DRY_RUN" if dry_run else "LIVE")
    log.info("ENDPOINT=%s", settings.url_for("deflate"))

    if dry_run:
        log.info("BODY=%s", request_body(job, preview_auth()))
        log.warning("Dry-run enabled. No requests will be sent.")
        return 0

    creds = credentials_from_env()
    try:
        client = DeflateClient(creds, settings=settings)
    except AuthenticationError as e:
        log.error("%s", e)
        return 1

    with client:
        limit = client.limit()
        if isinstance(limit, bool) or not isinstance(limit, int):
            limit = None
        try:
            validate_job(job, limit)
        except ConfigurationError as e:
            log.error("%s", e)
            return 1

        if len(job.images) == 1:
            result = client.compress(
                job.images[0], job.image_type, wait=job.wait, callback=job.callback, custom=job.custom
            )
        else:
            result = client.compress_multiple(
                job.images, job.image_type, wait=job.wait, callback=job.callback, custom=job.custom
            )

    if result is None:
        log.error("Compression request failed.")
        return 1
    log.info("RESULT=%s", result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
