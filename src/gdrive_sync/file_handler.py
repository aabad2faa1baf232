# -*- coding: utf-8 -*-
"""
File handling operations for Google Drive uploads.

This module provides destination name resolution and local path handling for
directory mirroring.
"""

import glob
import os


def escape_spaces(path):
    r"""
    Escape every space in a path with a backslash.

    Example:
        'dir/a b.txt' -> 'dir/a\ b.txt'
    """
    return path.replace(' ', '\\ ')


def resolve_upload_name(config, local_path):
    """
    Determine the name a local file gets in Google Drive.

    The first matching rule wins:
        1. use_complete_source_name: the full local path, spaces escaped
        2. name_prefix: prefix + base name
        3. name: the explicit name, the same for every file
        4. the base name unchanged

    Args:
        config (Config): Run configuration
        local_path (str): Local path as matched by the glob

    Returns:
        str: Destination file name

    Example:
        With name_prefix='p-', 'out/report.csv' is uploaded as 'p-report.csv'
    """
    if config.use_complete_source_name:
        return escape_spaces(local_path)

    base_name = os.path.basename(local_path)
    if config.name_prefix:
        return config.name_prefix + base_name
    if config.name:
        return config.name
    return base_name


def get_mirror_folder_path(local_path):
    """
    Get the directory part of a local path for mirroring.

    Args:
        local_path (str): Local file path

    Returns:
        str: Directory path with forward slashes, '' when the file is in the
            current directory
    """
    folder_path = os.path.dirname(local_path)
    if folder_path in ('', '.'):
        return ''
    return folder_path.replace(os.sep, '/')


def split_folder_path(folder_path):
    """
    Split a directory path into the folder names to mirror.

    Empty, '.' and '..' components have no folder of their own and are
    dropped, so '/tmp/./out' gives ['tmp', 'out'].

    Args:
        folder_path (str): Directory path using forward slashes

    Returns:
        list: Folder names from outermost to innermost
    """
    return [part for part in folder_path.split('/') if part not in ('', '.', '..')]


def _class_char(pattern, i):
    """
    Read one character of a bracket class, honouring backslash escapes.

    Returns:
        tuple: (character, index after it)

    Raises:
        ValueError: If the class ends here, or an unescaped '-' or ']' is
            found where a character is required
    """
    if i >= len(pattern):
        raise ValueError("unterminated '['")
    c = pattern[i]
    if c in '-]':
        raise ValueError(f"unexpected '{c}' in character class")
    if c == '\\':
        if i + 1 >= len(pattern):
            raise ValueError("trailing '\\'")
        return pattern[i + 1], i + 2
    return c, i + 1


def _glob_class(negated, chars, ranges):
    """Write a parsed character class in glob's bracket syntax."""
    if not negated and not ranges:
        if chars == ['!']:
            return '!'
        if chars == ['!', '-'] or chars == ['-', '!']:
            return '[-!]'

    # glob reads ']' as a member only first, '-' only last, and a leading '!'
    # as negation
    parts = [']'] if ']' in chars else []
    parts += ranges
    parts += [c for c in chars if c not in '!]-']
    if '!' in chars:
        parts.append('!')
    if '-' in chars:
        parts.append('-')
    return '[' + ('!' if negated else '') + ''.join(parts) + ']'


def translate_pattern(pattern):
    r"""
    Convert a filename pattern into the equivalent glob pattern.

    Patterns follow Go's filepath.Match rules: '[^...]' negates a class,
    '\' escapes the next character, and a class must not be empty or have an
    unescaped '-' or ']' where a character is expected.

    Args:
        pattern (str): Pattern as given in the filename input

    Returns:
        str: Pattern for glob.glob()

    Raises:
        ValueError: If the pattern is malformed (e.g., '[abc', '[]x]', 'a\')

    Examples:
        'a\[b'  -> 'a[[]b'  (literal '[')
        '[^a]*' -> '[!a]*'
        '[!a]*' -> '[a!]*'  ('!' is a plain character)
    """
    result = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == '\\':
            if i + 1 >= n:
                raise ValueError("trailing '\\'")
            result.append(glob.escape(pattern[i + 1]))
            i += 2
            continue
        if c != '[':
            result.append(c)
            i += 1
            continue

        i += 1
        negated = i < n and pattern[i] == '^'
        if negated:
            i += 1

        chars = []
        ranges = []
        seen_range = False
        while True:
            if i < n and pattern[i] == ']' and seen_range:
                i += 1
                break
            lo, i = _class_char(pattern, i)
            if i < n and pattern[i] == '-':
                hi, i = _class_char(pattern, i + 1)
                if lo > hi:
                    pass
                elif lo in '!]-\\' or hi in ']-\\':
                    # Spell these out; glob cannot write them as a range
                    chars.extend(chr(o) for o in range(ord(lo), ord(hi) + 1))
                else:
                    ranges.append(f"{lo}-{hi}")
            else:
                chars.append(lo)
            seen_range = True

        chars = list(dict.fromkeys(chars))
        if not chars and not ranges:
            # Only empty ranges: matches nothing, or any character if negated
            result.append('?' if negated else '[b-a]')
        else:
            result.append(_glob_class(negated, chars, ranges))
    return ''.join(result)
