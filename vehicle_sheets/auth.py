"""
OAuth2 credentials for the Google Sheets API.

The first run opens the installed-app consent flow and caches the resulting
authorized user token. Later runs reuse the cached token, refreshing it when
it has expired.
"""

import os
import logging
from typing import List, Optional

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from .config import SHEETS_SYNC_CONFIG
from .errors import ConfigReadError, AuthConfigError, AuthFlowError

logger = logging.getLogger(__name__)


def _token_from_file(token_file: str, scopes: List[str]) -> Optional[Credentials]:
    if not os.path.exists(token_file):
        logger.info(f"No cached token at {token_file}; authorization is required.")
        return None
    try:
        return Credentials.from_authorized_user_file(token_file, scopes)
    except ValueError as e:
        raise AuthConfigError(f"Unable to parse cached token {token_file}: {e}") from e
    except OSError as e:
        raise ConfigReadError(f"Unable to read cached token {token_file}: {e}") from e


def _token_from_web(client_secrets_file: str, scopes: List[str]) -> Credentials:
    try:
        flow = InstalledAppFlow.from_client_secrets_file(client_secrets_file, scopes)
    except FileNotFoundError as e:
        raise ConfigReadError(f"Unable to read client secret file: {client_secrets_file}") from e
    except OSError as e:
        raise ConfigReadError(f"Unable to read client secret file {client_secrets_file}: {e}") from e
    except ValueError as e:
        raise AuthConfigError(f"Unable to parse client secret file to config: {e}") from e

    try:
        return flow.run_local_server(port=0)
    except (OAuth2Error, google.auth.exceptions.GoogleAuthError) as e:
        raise AuthFlowError(f"Unable to retrieve token from web: {e}") from e


def save_token(token_file: str, credentials: Credentials) -> None:
    """Writes the token to `token_file`, readable by the current user only."""
    logger.info(f"Saving credential file to: {token_file}")
    try:
        fd = os.open(token_file, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(credentials.to_json())
    except OSError as e:
        raise AuthFlowError(f"Unable to cache oauth token: {e}") from e


def load_credentials(client_secrets_file: str = SHEETS_SYNC_CONFIG["credentials_file"],
                     token_file: str = SHEETS_SYNC_CONFIG["token_file"],
                     scopes: Optional[List[str]] = None) -> Credentials:
    """
    Returns valid user credentials, running the consent flow if needed.

    Args:
        client_secrets_file (str): OAuth client secrets JSON (installed app).
        token_file (str): Cache for the authorized user token.
        scopes (Optional[List[str]]): Defaults to the scopes in SHEETS_SYNC_CONFIG.
                                      If you change them, delete the cached token.

    Returns:
        Credentials: Credentials ready to authorize requests.

    Raises:
        ConfigReadError: If the client secrets file cannot be read.
        AuthConfigError: If the client secrets or cached token are malformed.
        AuthFlowError: If refreshing or exchanging the token fails.
    """
    scopes = scopes or SHEETS_SYNC_CONFIG["scopes"]
    credentials = _token_from_file(token_file, scopes)
    if credentials and credentials.valid:
        logger.info("Using cached Google credentials.")
        return credentials

    if credentials and credentials.expired and credentials.refresh_token:
        try:
            credentials.refresh(Request())
        except google.auth.exceptions.RefreshError as e:
            raise AuthFlowError(f"Unable to refresh cached token: {e}") from e
        logger.info("Refreshed expired Google credentials.")
    else:
        credentials = _token_from_web(client_secrets_file, scopes)
        logger.info("Successfully authorized with Google.")

    save_token(token_file, credentials)
    return credentials
