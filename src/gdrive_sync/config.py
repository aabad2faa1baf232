# -*- coding: utf-8 -*-
"""
Configuration management for Google Drive uploads.

This module reads the action inputs from the environment and builds the
immutable configuration shared by every upload in a run.
"""

from dataclasses import dataclass

from .utils import get_input, parse_bool

# Action input names
FILENAME_INPUT = 'filename'
NAME_INPUT = 'name'
FOLDER_ID_INPUT = 'folderId'
CREDENTIALS_INPUT = 'credentials'
OVERWRITE_INPUT = 'overwrite'
MIME_TYPE_INPUT = 'mimeType'
USE_COMPLETE_SOURCE_NAME_INPUT = 'useCompleteSourceFilenameAsName'
MIRROR_DIRECTORY_STRUCTURE_INPUT = 'mirrorDirectoryStructure'
NAME_PREFIX_INPUT = 'namePrefix'


class ConfigError(ValueError):
    """Raised when a required input is missing or an input is malformed."""


@dataclass(frozen=True)
class Config:
    """Configuration for one upload run"""

    file_pattern: str
    folder_id: str
    credentials: str
    name: str = ''
    name_prefix: str = ''
    mime_type: str = ''
    overwrite: bool = False
    overwrite_set: bool = False
    use_complete_source_name: bool = False
    mirror_directory_structure: bool = False

    def validate(self):
        """
        Validate configuration values.

        Required inputs are checked in declaration order so the first missing
        one is reported.

        Raises:
            ConfigError: If a required input is empty
        """
        required = (
            (FILENAME_INPUT, self.file_pattern),
            (FOLDER_ID_INPUT, self.folder_id),
            (CREDENTIALS_INPUT, self.credentials),
        )
        for input_name, value in required:
            if not value:
                raise ConfigError(f"Input {input_name} is missing or empty")

    @property
    def shared_explicit_name(self):
        """True when every file would be uploaded under the explicit name."""
        return bool(self.name) and not self.name_prefix and not self.use_complete_source_name


def load_config():
    """
    Build a Config from the action inputs.

    Inputs are read from INPUT_* environment variables:
        1. filename - Local file or glob pattern to upload (required)
        2. name - Explicit destination name (optional)
        3. folderId - Destination Drive folder ID (required)
        4. credentials - Base64 encoded service account JSON (required)
        5. overwrite - Logged only, see below (default: false)
        6. mimeType - MIME type for uploaded files (optional)
        7. useCompleteSourceFilenameAsName - Use the full local path as name
        8. mirrorDirectoryStructure - Recreate local directories in Drive
        9. namePrefix - Prefix added to each file's base name (optional)

    The overwrite flag does not decide between create and update; an existing
    same-named file is always updated in place.

    Returns:
        Config: Unvalidated configuration
    """
    overwrite_raw = get_input(OVERWRITE_INPUT)
    overwrite, _ = parse_bool(overwrite_raw)

    return Config(
        file_pattern=get_input(FILENAME_INPUT),
        folder_id=get_input(FOLDER_ID_INPUT),
        credentials=get_input(CREDENTIALS_INPUT),
        name=get_input(NAME_INPUT),
        name_prefix=get_input(NAME_PREFIX_INPUT),
        mime_type=get_input(MIME_TYPE_INPUT),
        overwrite=overwrite,
        overwrite_set=bool(overwrite_raw),
        use_complete_source_name=parse_bool(get_input(USE_COMPLETE_SOURCE_NAME_INPUT))[0],
        mirror_directory_structure=parse_bool(get_input(MIRROR_DIRECTORY_STRUCTURE_INPUT))[0],
    )


def parse_config():
    """
    Parse configuration from the action inputs.

    Returns:
        Config: Validated Config object

    Raises:
        ConfigError: If a required input is missing or empty
    """
    config = load_config()
    config.validate()
    return config
