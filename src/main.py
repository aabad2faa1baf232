#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Google Drive File Upload Script for GitHub Actions
==================================================

PURPOSE:
    This script uploads files from a workflow workspace to a Google Drive
    folder, typically used in CI/CD pipelines to publish build artifacts,
    reports or release packages.

SYNOPSIS:
    Run as an action step; inputs arrive as INPUT_* environment variables.
    For local runs, put the same variables in a .env file and run:

        python main.py

INPUTS:
    Required Inputs:
    ---------------
    filename
        Local file or glob pattern to upload.
        Supports wildcards: *, ?, [seq], [^seq]; a backslash escapes the next
        character. Hidden files are matched too.
        `Example`: 'dist/*.zip' or 'report.pdf'
        `Environment`: INPUT_FILENAME

    folderId
        ID of the Google Drive folder that receives the files.
        Found at the end of the folder URL:
        https://drive.google.com/drive/folders/<folderId>
        `Environment`: INPUT_FOLDERID

    credentials
        Base64 encoded JSON key of a Google service account. The folder must
        be shared with the service account's email address.
        `WARNING`: Store in GitHub Secrets, never commit it.
        `Environment`: INPUT_CREDENTIALS

    Optional Inputs:
    ---------------
    name
        Name for the uploaded file. Applied to every matched file, so with
        several matches they all target the same Drive file.
        `Environment`: INPUT_NAME

    namePrefix
        Prefix prepended to each file's base name. Takes precedence over name.
        `Environment`: INPUT_NAMEPREFIX

    useCompleteSourceFilenameAsName
        'true' to name each file after its full local path (spaces escaped
        with a backslash). Takes precedence over namePrefix and name.
        `Environment`: INPUT_USECOMPLETESOURCEFILENAMEASNAME

    mirrorDirectoryStructure
        'true' to recreate each file's local directories below folderId and
        upload the file into the deepest one.
        `Environment`: INPUT_MIRRORDIRECTORYSTRUCTURE

    mimeType
        MIME type for the uploaded files. Default: detected by Drive.
        `Environment`: INPUT_MIMETYPE

    overwrite
        Logged only. A file with the same name in the destination folder is
        always updated in place, whatever this value is.
        `Environment`: INPUT_OVERWRITE

DESCRIPTION:
    - Expands the glob pattern; fails if it matches nothing
    - Authenticates with the drive.file scope (only files this app created)
    - Creates missing folders when mirroring directory structure
    - Updates existing same-named files in place, keeping their ID and link
    - Supports shared drives
    - Prints a viewer link for every uploaded file
    - Stops at the first error with exit code 1

EXAMPLES:
    1. Upload a single file:
       INPUT_FILENAME=report.pdf INPUT_FOLDERID=1AbC... \\
       INPUT_CREDENTIALS=$(base64 -w0 sa.json) python main.py

    2. Upload build artifacts keeping their folders:
       INPUT_FILENAME='build/*/*.zip' INPUT_MIRRORDIRECTORYSTRUCTURE=true \\
       INPUT_FOLDERID=1AbC... INPUT_CREDENTIALS=... python main.py

    3. Upload with a version prefix:
       INPUT_FILENAME='dist/*' INPUT_NAMEPREFIX='v1.2.3-' \\
       INPUT_FOLDERID=1AbC... INPUT_CREDENTIALS=... python main.py

REQUIREMENTS:
    - Python 3.11 or higher
    - google-auth, requests, python-dotenv
    - A service account with access to the destination folder
"""

# ====================================
# IMPORTS - External libraries needed
# ====================================

import glob

from dotenv import load_dotenv

# Drive upload modules
from gdrive_sync.auth import CredentialsError, create_drive_session
from gdrive_sync.config import ConfigError, parse_config
from gdrive_sync.drive_api import DriveApiError
from gdrive_sync.file_handler import translate_pattern
from gdrive_sync.monitoring import UploadStatistics
from gdrive_sync.uploader import UploadError, upload_file_with_structure
from gdrive_sync.utils import fatal, warning


# ====================================================================
# FILE DISCOVERY - Finding files to upload
# ====================================================================

def discover_files(pattern):
    """
    Expand the filename pattern into the list of paths to upload.

    Hidden files are matched like any other, so '*' also picks up '.env.ci'.

    Args:
        pattern (str): File path or glob pattern to match

    Returns:
        list: Matched paths (files and directories) in sorted order

    Raises:
        ConfigError: If the pattern is malformed or matches nothing

    Examples:
        >>> discover_files('*.pdf')
        ['invoice.pdf', 'report.pdf']
    """
    try:
        glob_pattern = translate_pattern(pattern)
    except ValueError as e:
        raise ConfigError(f"Invalid filename pattern: {e} in {pattern}") from e

    local_items = sorted(glob.glob(glob_pattern, include_hidden=True))
    print(f"Files: {local_items}")

    if not local_items:
        raise ConfigError(f"No file found! pattern: {pattern}")
    return local_items


# ====================================================================
# MAIN EXECUTION
# ====================================================================

def main():
    """
    Main execution function that orchestrates the Drive upload.

    Process:
        1. Read and validate the action inputs
        2. Discover files matching the pattern
        3. Authenticate with the service account
        4. Upload each file (mirroring folders if enabled)
        5. Print summary statistics

    Any error stops the run with exit code 1; files already uploaded and
    folders already created are left in place.
    """
    # Load INPUT_* values from a .env file for local runs
    load_dotenv()

    try:
        config = parse_config()
        local_files = discover_files(config.file_pattern)
    except ConfigError as e:
        fatal(str(e))

    if not config.overwrite_set:
        warning("Overwrite is disabled.")
    else:
        print(f"[=] Overwrite: {config.overwrite}")

    if config.shared_explicit_name and len(local_files) > 1:
        warning(f"{len(local_files)} files matched and will all be uploaded as '{config.name}'")

    if config.mirror_directory_structure:
        print("[OK] Mirroring local directory structure in Google Drive")

    print("[*] Connecting to Google Drive...")
    try:
        session = create_drive_session(config.credentials)
    except CredentialsError as e:
        fatal(str(e))

    stats = UploadStatistics()
    folder_cache = {}

    for local_path in local_files:
        try:
            upload_file_with_structure(session, config, local_path, folder_cache, stats)
        except (DriveApiError, UploadError) as e:
            fatal(f"Failed to upload {local_path} to Google Drive: {e}")

    stats.print_summary(len(local_files))


if __name__ == "__main__":
    main()
