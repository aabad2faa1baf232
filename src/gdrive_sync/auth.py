# -*- coding: utf-8 -*-
"""
Google authentication module for Drive uploads.

This module turns the base64 encoded service account key passed to the action
into an authorized HTTP session using google-auth.
"""

import base64
import binascii
import json

from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

# Only files created or opened by this app, not the whole drive
DRIVE_FILE_SCOPE = 'https://www.googleapis.com/auth/drive.file'


class CredentialsError(Exception):
    """Raised when the credentials input cannot be decoded or parsed."""


def decode_credentials(encoded):
    """
    Decode the base64 credentials input into service account info.

    Args:
        encoded (str): Base64 encoded service account JSON key

    Returns:
        dict: Parsed service account key

    Raises:
        CredentialsError: If the value is not valid base64 or not a JSON object
    """
    try:
        # `base64` wraps its output at 76 columns; line breaks are not data
        decoded = base64.b64decode(''.join(encoded.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialsError(f"Failed to decode credentials: {e}") from e

    try:
        info = json.loads(decoded)
    except (UnicodeDecodeError, ValueError) as e:
        raise CredentialsError(f"Failed to parse credentials JSON: {e}") from e

    if not isinstance(info, dict):
        raise CredentialsError("Failed to parse credentials JSON: expected an object")
    return info


def create_drive_session(encoded_credentials):
    """
    Create an authorized session for the Drive API.

    Tokens are minted and refreshed by the session itself, so the same session
    is reused for every request in the run.

    Args:
        encoded_credentials (str): Base64 encoded service account JSON key

    Returns:
        AuthorizedSession: requests.Session that adds a bearer token to each call

    Raises:
        CredentialsError: If the key cannot be decoded or is not a valid
            service account key
    """
    info = decode_credentials(encoded_credentials)

    try:
        credentials = service_account.Credentials.from_service_account_info(
            info, scopes=[DRIVE_FILE_SCOPE]
        )
    except (ValueError, KeyError) as e:
        raise CredentialsError(f"Failed to create service account credentials: {e}") from e

    return AuthorizedSession(credentials)
