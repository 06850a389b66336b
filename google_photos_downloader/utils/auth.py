"""Authentication utilities for Google Photos API."""

import getpass
import json
import os
import sys
from typing import Any, Dict, Optional, cast

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from google_auth_oauthlib.helpers import credentials_from_session
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from oauthlib.oauth2 import LegacyApplicationClient, OAuth2Error
from requests.exceptions import RequestException
from requests_oauthlib import OAuth2Session

from google_photos_downloader.client import PhotosSession
from google_photos_downloader.config import DEFAULT_CLIENT_SECRETS
from google_photos_downloader.models import AuthenticationError, ValidationError

SCOPES = ['https://www.googleapis.com/auth/photoslibrary.readonly']

LOGIN_ERRORS = (
    OAuth2Error,
    GoogleAuthError,
    HttpError,
    RequestException,
    OSError,
    KeyError,
    ValueError,
)


def load_client_config(credentials_path: str) -> Dict[str, Any]:
    """Load the OAuth client section from a client secrets file.

    Args:
        credentials_path: Path to client_secret.json file

    Returns:
        The "installed" or "web" client configuration

    Raises:
        FileNotFoundError: If the client secrets file is not found
        ValueError: If the file holds no client configuration
    """
    if not os.path.exists(credentials_path):
        raise FileNotFoundError(f"Missing credentials file at {credentials_path}")

    with open(credentials_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    for section in ('installed', 'web'):
        if section in data:
            return data[section]
    raise ValueError(f"No client configuration found in {credentials_path}")


def get_credentials(username: str, password: str, client_config: Dict[str, Any]) -> Credentials:
    """Exchange a username and password for user credentials.

    Uses the OAuth 2.0 resource owner password grant.

    Args:
        username: Account name
        password: Account password
        client_config: OAuth client configuration

    Returns:
        Valid credentials object
    """
    oauth = OAuth2Session(
        client=LegacyApplicationClient(client_id=client_config['client_id']),
        scope=SCOPES,
    )
    oauth.fetch_token(
        token_url=client_config['token_uri'],
        username=username,
        password=password,
        client_id=client_config['client_id'],
        client_secret=client_config.get('client_secret'),
    )
    return cast(Credentials, credentials_from_session(oauth, client_config))


def get_interactive_credentials(client_config: Dict[str, Any]) -> Credentials:
    """Let the user log in through the browser.

    The resulting token is kept in memory only.
    """
    flow = InstalledAppFlow.from_client_config({'installed': client_config}, SCOPES)
    return cast(Credentials, flow.run_local_server(port=0))


def login(username: Optional[str] = None,
          password: Optional[str] = None,
          credentials_path: str = DEFAULT_CLIENT_SECRETS) -> PhotosSession:
    """Authenticate with Google Photos API and build the session.

    Args:
        username: Account name; the browser flow is used when omitted
        password: Account password
        credentials_path: Path to client_secret.json file

    Returns:
        Authenticated session

    Raises:
        AuthenticationError: If authentication fails
    """
    try:
        client_config = load_client_config(credentials_path)
        if username:
            creds = get_credentials(username, password or '', client_config)
        else:
            creds = get_interactive_credentials(client_config)
        service = build('photoslibrary', 'v1', credentials=creds, static_discovery=False)
    except LOGIN_ERRORS as e:
        raise AuthenticationError(f"Error logging in: {e}") from e
    return PhotosSession(service, AuthorizedSession(creds))


def prompt_password(username: str) -> str:
    """Read a password from the terminal without echoing it.

    Raises:
        ValidationError: If there is no terminal to prompt on
    """
    if not sys.stdin.isatty():
        raise ValidationError("--username requires --password when not running interactively")
    return getpass.getpass(f"Password for {username}: ")
