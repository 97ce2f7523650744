"""Firebase Admin SDK application set-up."""

import base64
import json
from typing import Optional

import firebase_admin
from firebase_admin import credentials
from loguru import logger

from provision_ai.settings import Settings

FIREBASE_APP_NAME = "provision_ai"


def load_credentials(app_settings: Settings) -> credentials.Base:
    """
    Load the service account credentials.

    The base64-encoded JSON is used when present, then the credential
    file, then application default credentials.

    :param app_settings: Application settings
    :return: Firebase credentials
    """
    if app_settings.firebase_credentials_base64:
        raw = base64.b64decode(app_settings.firebase_credentials_base64)
        logger.info("Loading Firebase credentials from base64 environment variable")
        return credentials.Certificate(json.loads(raw.decode("utf-8")))

    if app_settings.firebase_credentials_file:
        logger.info(
            f"Loading Firebase credentials from {app_settings.firebase_credentials_file}"
        )
        return credentials.Certificate(app_settings.firebase_credentials_file)

    logger.info("Using application default credentials for Firebase")
    return credentials.ApplicationDefault()


def get_firebase_app(app_settings: Settings) -> firebase_admin.App:
    """
    Get the Firebase app of this service, initializing it on first use.

    :param app_settings: Application settings
    :return: Firebase app
    """
    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    options: Optional[dict] = None
    if app_settings.firebase_storage_bucket:
        options = {"storageBucket": app_settings.firebase_storage_bucket}

    app = firebase_admin.initialize_app(
        load_credentials(app_settings),
        options=options,
        name=FIREBASE_APP_NAME,
    )
    logger.info("Initialized Firebase app")
    return app
