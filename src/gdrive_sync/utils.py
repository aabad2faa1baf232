# -*- coding: utf-8 -*-
"""
Shared utility functions for Google Drive upload operations.

This module provides action input access, boolean parsing and the console
helpers used across multiple modules.
"""

import os
import sys

# Spellings accepted as booleans (same set as Go's strconv.ParseBool)
TRUE_VALUES = ('1', 't', 'T', 'TRUE', 'true', 'True')
FALSE_VALUES = ('0', 'f', 'F', 'FALSE', 'false', 'False')


def get_input(name):
    """
    Read a workflow input from the environment.

    The runner exposes an input named 'folderId' as INPUT_FOLDERID: the name
    is upper-cased and spaces become underscores.

    Args:
        name (str): Input name as declared by the action (e.g., 'folderId')

    Returns:
        str: Input value with surrounding whitespace removed, '' if unset
    """
    env_name = 'INPUT_' + name.replace(' ', '_').upper()
    return os.environ.get(env_name, '').strip()


def parse_bool(value):
    """
    Parse a boolean input string.

    Args:
        value (str): Raw input value

    Returns:
        tuple: (flag, recognised) - flag is False when the value is not a
            recognised spelling
    """
    if value in TRUE_VALUES:
        return True, True
    if value in FALSE_VALUES:
        return False, True
    return False, False


def is_debug_enabled():
    """
    Check if debug output is enabled.

    Enabled by DEBUG_UPLOAD=true, or by the runner's own debug logging
    (RUNNER_DEBUG=1, set when a workflow is re-run with debug logging).

    Returns:
        bool: True if debug mode is enabled, False otherwise
    """
    if os.environ.get('DEBUG_UPLOAD', 'false').lower() == 'true':
        return True
    return os.environ.get('RUNNER_DEBUG', '') == '1'


def warning(message):
    """Print a warning the runner shows as an annotation."""
    print(f"::warning::{message}")


def fatal(message):
    """
    Print an error annotation and terminate the run.

    Exit code 1 signals failure to the calling workflow step.
    """
    print(f"::error::{message}")
    sys.exit(1)
