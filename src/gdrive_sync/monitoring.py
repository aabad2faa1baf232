# -*- coding: utf-8 -*-
"""
Upload statistics tracking for Google Drive uploads.

This module counts what a run did and prints the closing summary.
"""


class UploadStatistics:
    """Track upload statistics for one run"""

    def __init__(self):
        """Initialize upload statistics"""
        self.stats = {
            'new_files': 0,
            'replaced_files': 0,
            'skipped_directories': 0,
            'created_folders': 0,
            'bytes_uploaded': 0,
        }

    def record_upload(self, file_size, is_update):
        """Count one uploaded file."""
        if is_update:
            self.stats['replaced_files'] += 1
        else:
            self.stats['new_files'] += 1
        self.stats['bytes_uploaded'] += file_size

    def print_summary(self, total_files):
        """
        Print final summary report of upload statistics.

        Args:
            total_files (int): Total number of matched paths
        """
        print("\n" + "=" * 60)
        print("[✓] UPLOAD COMPLETED")
        print("=" * 60)
        print(f"[STATS] Upload Statistics:")
        print(f"   - New files uploaded:       {self.stats['new_files']:>6}")
        print(f"   - Files updated:            {self.stats['replaced_files']:>6}")
        print(f"   - Directories skipped:      {self.stats['skipped_directories']:>6}")
        print(f"   - Folders created:          {self.stats['created_folders']:>6}")
        print(f"   - Total paths matched:      {total_files:>6}")
        print(f"   - Data uploaded:            {format_bytes(self.stats['bytes_uploaded'])}")
        print("=" * 60)


def format_bytes(bytes_value):
    """
    Convert bytes to human-readable format.

    Args:
        bytes_value (int): Number of bytes to format

    Returns:
        str: Human-readable string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_value < 1024.0:
            return f"{bytes_value:.1f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.1f} TB"
