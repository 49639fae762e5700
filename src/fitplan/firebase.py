"""Firebase Admin SDK initialisation."""

from __future__ import annotations

import json

import firebase_admin
import structlog
from firebase_admin import credentials

from fitplan.config import Settings

logger = structlog.get_logger()


def init_firebase(settings: Settings) -> firebase_admin.App:
    """Initialise the default Firebase app once and return it.

    Credentials come from, in order: an inline service-account JSON, a
    service-account file, or Application Default Credentials.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if settings.firebase_service_account_json:
        cred = credentials.Certificate(json.loads(settings.firebase_service_account_json))
    elif settings.firebase_credentials_path:
        cred = credentials.Certificate(settings.firebase_credentials_path)
    else:
        cred = credentials.ApplicationDefault()

    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    app = firebase_admin.initialize_app(cred, options)
    logger.info("firebase_initialized", project_id=app.project_id)
    return app
