"""Lazily created Firestore AsyncClient shared by every repository."""

from __future__ import annotations

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

_client: Any = None


def firestore_settings() -> dict[str, str]:
    """Client keyword arguments taken from the environment.

    ``SKYLOG_FIRESTORE_PROJECT`` and ``SKYLOG_FIRESTORE_DATABASE`` are
    optional; without them the client falls back to ADC's project and the
    ``(default)`` database.  ``FIRESTORE_EMULATOR_HOST`` is honoured by the
    client library itself.
    """
    kwargs: dict[str, str] = {}
    project = os.environ.get("SKYLOG_FIRESTORE_PROJECT")
    database = os.environ.get("SKYLOG_FIRESTORE_DATABASE")
    if project:
        kwargs["project"] = project
    if database:
        kwargs["database"] = database
    return kwargs


def get_firestore_client() -> Any:
    """Return the process-wide Firestore client, creating it on first use.

    Needs the ``gcp`` extra (google-cloud-firestore).
    """
    global _client
    if _client is not None:
        return _client

    from google.cloud.firestore import AsyncClient

    settings = firestore_settings()
    _client = AsyncClient(**settings)
    if os.environ.get("FIRESTORE_EMULATOR_HOST"):
        logger.info("Using Firestore emulator at %s", os.environ["FIRESTORE_EMULATOR_HOST"])
    else:
        logger.info("Using Google Cloud Firestore (project=%s)", _client.project)
    return _client


def _reset_client() -> None:
    """Drop the cached client so the next call rebuilds it."""
    global _client
    _client = None
