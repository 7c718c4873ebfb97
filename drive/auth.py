"""
drive/auth.py
-------------
Google Drive authentication using google-auth-oauthlib.

Handles the OAuth2 installed-app flow and stores the user's token so the
browser step only happens on the first run.
"""

import json
from pathlib import Path
from typing import Any, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from utils.logger import get_logger

logger = get_logger(__name__)

DRIVE_READONLY_SCOPE = "https://www.googleapis.com/auth/drive.readonly"
SCOPES = [DRIVE_READONLY_SCOPE]
TOKEN_FILENAME = "token.json"


class DriveAuthError(Exception):
    """Raised when authentication with Google Drive fails."""


def parse_client_secrets(client_secrets_json: str) -> dict[str, Any]:
    """
    Parse OAuth client secrets as downloaded from the Cloud console.

    Raises:
        DriveAuthError: If the JSON is invalid or not an OAuth client config.
    """
    try:
        config = json.loads(client_secrets_json)
    except json.JSONDecodeError as e:
        raise DriveAuthError(f"GOOGLE_CREDENTIALS is not valid JSON: {e}") from e
    if not isinstance(config, dict) or not ({"installed", "web"} & config.keys()):
        raise DriveAuthError(
            "GOOGLE_CREDENTIALS must be an OAuth client secrets JSON "
            "with an 'installed' or 'web' section.\n\n"
            "To get started:\n"
            "1. Go to https://console.cloud.google.com/\n"
            "2. Enable the Google Drive API\n"
            "3. Create OAuth 2.0 credentials (Desktop app)\n"
            "4. Paste the downloaded JSON into GOOGLE_CREDENTIALS in .env"
        )
    return config


def _load_saved_credentials(token_path: Path) -> Optional[Credentials]:
    if not token_path.exists():
        return None
    try:
        return Credentials.from_authorized_user_file(str(token_path), SCOPES)
    except (ValueError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable token file {token_path}: {e}")
        return None


def load_credentials(
    client_secrets_json: str,
    tokens_dir: str = ".tokens",
    port: int = 8888,
) -> Credentials:
    """
    Return authorized user credentials for the Drive API.

    Authentication flow:
    1. Load the saved token from ``<tokens_dir>/token.json``
    2. Refresh it if it expired and has a refresh token
    3. Otherwise run the local-server OAuth2 flow on ``port``
    4. Save the token for the next run

    Raises:
        DriveAuthError: If the client secrets are invalid or the flow fails.
    """
    token_path = Path(tokens_dir).resolve() / TOKEN_FILENAME
    token_path.parent.mkdir(parents=True, exist_ok=True)

    creds = _load_saved_credentials(token_path)
    if creds and creds.valid:
        logger.info("Using saved Google credentials.")
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            logger.info("Refreshing expired Google access token...")
            creds.refresh(Request())
        except RefreshError as e:
            logger.warning(f"Token refresh failed, re-authorizing: {e}")
            creds = None
    else:
        creds = None

    if creds is None:
        client_config = parse_client_secrets(client_secrets_json)
        try:
            flow = InstalledAppFlow.from_client_config(client_config, scopes=SCOPES)
            logger.info(f"Starting OAuth2 flow, waiting for the browser on port {port}...")
            creds = flow.run_local_server(
                port=port,
                open_browser=False,
                access_type="offline",
                prompt="consent",
            )
        except Exception as e:
            raise DriveAuthError(f"OAuth flow failed: {e}") from e

    token_path.write_text(creds.to_json(), encoding="utf-8")
    logger.info(f"Google credentials saved to {token_path}")
    return creds


def build_drive_service(credentials: Credentials):
    """
    Build a Drive v3 API resource.

    Raises:
        DriveAuthError: If the service cannot be built.
    """
    try:
        return build("drive", "v3", credentials=credentials, cache_discovery=False)
    except Exception as e:
        raise DriveAuthError(f"Failed to build Drive service: {e}") from e
