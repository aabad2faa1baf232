# -*- coding: utf-8 -*-
"""
Google Drive v3 REST operations for Drive uploads.

This module provides all Drive API interactions: file lookup by name, folder
creation and the two-step resumable upload used for both new and existing
files. Every call goes through make_drive_request() on the authorized session
from auth.create_drive_session().
"""

import requests
from google.auth.exceptions import GoogleAuthError

from .utils import is_debug_enabled

FILES_URL = 'https://www.googleapis.com/drive/v3/files'
UPLOAD_URL = 'https://www.googleapis.com/upload/drive/v3/files'

# Folders in Google Drive are files with a reserved MIME type
FOLDER_MIME_TYPE = 'application/vnd.google-apps.folder'

# Fields requested for every returned file resource
FILE_FIELDS = 'id,name,mimeType,parents'


class DriveApiError(Exception):
    """Raised when a Drive API call fails or returns a non-2xx response."""

    def __init__(self, status_code, message):
        if status_code is None:
            super().__init__(f"Drive API request failed: {message}")
        else:
            super().__init__(f"Drive API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response):
    """Extract the error message from a Drive API error response."""
    try:
        return response.json()['error']['message']
    except (ValueError, KeyError, TypeError):
        return response.text[:500]


def make_drive_request(session, method, url, params=None, json_data=None, data=None, headers=None):
    """
    Make a Drive API request and fail on any non-2xx response.

    There is no retry: a single failed call is returned to the caller as
    DriveApiError.

    Args:
        session (requests.Session): Authorized session
        method (str): HTTP method ('GET', 'POST', 'PATCH', 'PUT')
        url (str): Drive API URL
        params (dict): Query string parameters
        json_data (dict): JSON body (mutually exclusive with data)
        data: Raw body, bytes or an open file object to stream
        headers (dict): Extra request headers

    Returns:
        requests.Response: The successful response

    Raises:
        DriveApiError: On transport failure or a non-2xx status code
    """
    if is_debug_enabled():
        print(f"[DEBUG] {method} {url} params={params}")

    try:
        response = session.request(
            method, url, params=params, json=json_data, data=data, headers=headers
        )
    except requests.exceptions.RequestException as e:
        raise DriveApiError(None, f"{method} {url}: {e}") from e
    except GoogleAuthError as e:
        # The session mints its token on the first request
        raise DriveApiError(None, f"{method} {url}: authentication failed: {e}") from e

    if not 200 <= response.status_code < 300:
        raise DriveApiError(response.status_code, _error_message(response))

    return response


def escape_query_value(value):
    r"""
    Escape a value for use inside a single-quoted Drive query string.

    Backslashes and single quotes must be escaped with a backslash, e.g.
    "it's" becomes "it\'s".
    """
    return value.replace('\\', '\\\\').replace("'", "\\'")


def find_file_by_name(session, name, parent_folder_id):
    """
    Find a non-trashed file or folder by exact name inside a parent folder.

    Args:
        session (requests.Session): Authorized session
        name (str): Exact item name
        parent_folder_id (str): ID of the folder to search in

    Returns:
        dict: First matching file resource (id, name, mimeType, parents)
        None: If nothing matches

    Note:
        When several items match only the first is returned; the order is
        whatever the API returns.
    """
    query = (
        f"name = '{escape_query_value(name)}' "
        f"and '{escape_query_value(parent_folder_id)}' in parents "
        f"and trashed = false"
    )
    params = {
        'q': query,
        'fields': f'files({FILE_FIELDS})',
        'supportsAllDrives': 'true',
        'includeItemsFromAllDrives': 'true',
    }

    try:
        response = make_drive_request(session, 'GET', FILES_URL, params=params)
    except DriveApiError as e:
        raise DriveApiError(e.status_code, f"error searching for file by name '{name}': {e.message}") from e

    files = response.json().get('files', [])
    if files:
        return files[0]
    return None


def create_folder(session, folder_name, parent_folder_id):
    """
    Create a folder in Google Drive.

    Args:
        session (requests.Session): Authorized session
        folder_name (str): Name for the new folder
        parent_folder_id (str): Parent folder ID

    Returns:
        dict: Created folder resource including 'id'

    Raises:
        DriveApiError: If the folder could not be created
    """
    body = {
        'name': folder_name,
        'mimeType': FOLDER_MIME_TYPE,
        'parents': [parent_folder_id],
    }
    params = {'supportsAllDrives': 'true', 'fields': FILE_FIELDS}

    try:
        response = make_drive_request(session, 'POST', FILES_URL, params=params, json_data=body)
    except DriveApiError as e:
        raise DriveApiError(e.status_code, f"failed to create folder '{folder_name}': {e.message}") from e

    folder = response.json()
    if is_debug_enabled():
        print(f"[DEBUG] Folder created: {folder_name} ({folder.get('id')})")
    return folder


def create_upload_session(session, metadata, file_size, mime_type='', file_id=None, add_parents=None):
    """
    Start a resumable upload session.

    A new file is created with POST; an existing file is updated in place with
    PATCH on its ID, keeping the ID and optionally attaching a parent.

    Args:
        session (requests.Session): Authorized session
        metadata (dict): File metadata (name, mimeType, parents for new files)
        file_size (int): Size of the content in bytes
        mime_type (str): Content MIME type, '' to let Drive detect it
        file_id (str): ID of the file to update, None to create a new file
        add_parents (str): Folder ID to attach an updated file to

    Returns:
        str: Session URL the content must be sent to

    Raises:
        DriveApiError: If the session could not be started
    """
    params = {
        'uploadType': 'resumable',
        'supportsAllDrives': 'true',
        'fields': FILE_FIELDS,
    }
    headers = {'X-Upload-Content-Length': str(file_size)}
    if mime_type:
        headers['X-Upload-Content-Type'] = mime_type

    if file_id:
        if add_parents:
            params['addParents'] = add_parents
        method, url = 'PATCH', f"{UPLOAD_URL}/{file_id}"
    else:
        method, url = 'POST', UPLOAD_URL

    response = make_drive_request(
        session, method, url, params=params, json_data=metadata, headers=headers
    )

    session_url = response.headers.get('Location')
    if not session_url:
        raise DriveApiError(response.status_code, "upload session response has no Location header")

    if is_debug_enabled():
        print(f"[DEBUG] Upload session created: {session_url[:60]}...")
    return session_url


def upload_content(session, session_url, file_obj, file_size):
    """
    Send file content to a resumable upload session in a single request.

    Args:
        session (requests.Session): Authorized session
        session_url (str): URL from create_upload_session()
        file_obj: Open binary file, streamed as the request body
        file_size (int): Size of the content in bytes

    Returns:
        dict: Resulting file resource including 'id'

    Raises:
        DriveApiError: If the upload is rejected
    """
    # An empty stream would make requests switch to chunked encoding
    body = file_obj if file_size else b''
    response = make_drive_request(
        session, 'PUT', session_url, data=body,
        headers={'Content-Length': str(file_size)}
    )
    return response.json()
