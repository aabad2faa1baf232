# -*- coding: utf-8 -*-
"""
Upload operations for Google Drive uploads.

This module handles folder mirroring, the create-or-update decision and the
upload of each matched file.
"""

import os

from .drive_api import (
    create_folder,
    create_upload_session,
    find_file_by_name,
    upload_content,
)
from .file_handler import get_mirror_folder_path, resolve_upload_name, split_folder_path
from .utils import is_debug_enabled

VIEW_URL_TEMPLATE = 'https://drive.google.com/file/d/{}/view'


class UploadError(Exception):
    """Raised when a local file cannot be read for upload."""


def ensure_folder_exists(session, root_folder_id, folder_path, folder_cache=None, stats=None):
    """
    Create the folder structure below a root folder if it doesn't exist.

    Each path segment is looked up by name under its parent and reused when
    found, otherwise it is created. Lookups are not locked, so two runs racing
    on the same path can both create a folder.

    Args:
        session (requests.Session): Authorized session
        root_folder_id (str): Folder the structure is created in
        folder_path (str): Path to mirror (e.g., 'reports/2024/january')
        folder_cache (dict): Run-scoped cache of cumulative path -> folder ID
        stats (UploadStatistics): Statistics to count created folders in

    Returns:
        str: The ID of the deepest folder, ready to receive files

    Raises:
        DriveApiError: If a lookup or folder creation fails

    Example:
        target_id = ensure_folder_exists(session, root_id, "reports/2024")
        # 'reports' and 'reports/2024' now exist under root_id
    """
    if folder_cache is None:
        folder_cache = {}

    current_folder_id = root_folder_id
    current_path = ""

    for folder_name in split_folder_path(folder_path):
        current_path = f"{current_path}/{folder_name}" if current_path else folder_name

        if current_path in folder_cache:
            current_folder_id = folder_cache[current_path]
            continue

        existing = find_file_by_name(session, folder_name, current_folder_id)
        if existing is not None:
            if is_debug_enabled():
                print(f"[✓] Folder already exists: {current_path}")
            current_folder_id = existing['id']
        else:
            print(f"[+] Creating folder: {current_path}")
            created = create_folder(session, folder_name, current_folder_id)
            current_folder_id = created['id']
            if stats is not None:
                stats.stats['created_folders'] += 1

        folder_cache[current_path] = current_folder_id

    return current_folder_id


def success_callback(link, local_path, is_update=False):
    """
    Report a finished upload.

    Args:
        link (str): Viewer link of the uploaded file
        local_path (str): Path to the local file
        is_update (bool): True if an existing file was replaced
    """
    if is_debug_enabled():
        action = "Updated" if is_update else "Created"
        print(f"[✓] {action}: {local_path}")
    print(f"Uploaded file: {link}")


def upload_file(session, local_path, folder_id, existing_file, name, mime_type=''):
    """
    Upload one local file, updating the existing Drive file when given.

    Args:
        session (requests.Session): Authorized session
        local_path (str): Path to the local file
        folder_id (str): Destination folder ID
        existing_file (dict): Same-named file found in the folder, or None
        name (str): Destination file name
        mime_type (str): MIME type, '' to let Drive detect it

    Returns:
        tuple: (viewer link, uploaded size in bytes)

    Raises:
        UploadError: If the local file cannot be read
        DriveApiError: If the upload fails
    """
    try:
        file_size = os.stat(local_path).st_size
    except OSError as e:
        raise UploadError(f"stat of file {local_path} failed with error: {e}") from e

    metadata = {'name': name}
    if mime_type:
        metadata['mimeType'] = mime_type

    if existing_file is not None:
        session_url = create_upload_session(
            session, metadata, file_size, mime_type,
            file_id=existing_file['id'], add_parents=folder_id
        )
    else:
        metadata['parents'] = [folder_id]
        session_url = create_upload_session(session, metadata, file_size, mime_type)

    try:
        with open(local_path, 'rb') as f:
            uploaded = upload_content(session, session_url, f, file_size)
    except OSError as e:
        raise UploadError(f"opening file {local_path} failed with error: {e}") from e

    return VIEW_URL_TEMPLATE.format(uploaded['id']), file_size


def upload_file_with_structure(session, config, local_path, folder_cache=None, stats=None):
    """
    Upload a matched path, mirroring its directory when enabled.

    Process:
        1. Skip directories (no API calls are made for them)
        2. Mirror the local directory below the root folder if enabled
        3. Resolve the destination name
        4. Look for a same-named file in the destination folder
        5. Update that file, or create a new one

    Args:
        session (requests.Session): Authorized session
        config (Config): Run configuration
        local_path (str): Matched local path
        folder_cache (dict): Run-scoped folder ID cache for mirroring
        stats (UploadStatistics): Statistics to update

    Returns:
        str: Viewer link of the uploaded file
        None: If the path is a directory and was skipped
    """
    if os.path.isdir(local_path):
        print(f"[!] {local_path} is a directory. skipping upload.")
        if stats is not None:
            stats.stats['skipped_directories'] += 1
        return None

    folder_id = config.folder_id
    if config.mirror_directory_structure:
        folder_path = get_mirror_folder_path(local_path)
        if folder_path:
            folder_id = ensure_folder_exists(
                session, config.folder_id, folder_path, folder_cache, stats
            )

    name = resolve_upload_name(config, local_path)
    existing_file = find_file_by_name(session, name, folder_id)

    if is_debug_enabled():
        action = "Updating" if existing_file else "Uploading"
        print(f"[→] {action} {local_path} as '{name}' in folder {folder_id}")

    link, file_size = upload_file(
        session, local_path, folder_id, existing_file, name, config.mime_type
    )
    if stats is not None:
        stats.record_upload(file_size, existing_file is not None)

    success_callback(link, local_path, is_update=existing_file is not None)
    return link
