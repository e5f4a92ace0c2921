"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Shared by every osdeps process on the machine, whatever the manager.
LOCK_PATH = "/tmp/osdeps_install.lock"
LOCK_PATH_ENV = "OSDEPS_LOCK_PATH"

# Seconds between two non-blocking lock attempts.
LOCK_RETRY_SECONDS = 5.0

# PATH of the isolated environment elevated commands run in.
PRIVILEGED_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"

# Elevation helper and the flag that keeps our constructed environment.
ELEVATION_HELPER = "sudo"
ELEVATION_PRESERVE_ENV = "--preserve-env"

# Installed-package database of portage.
PORTAGE_PKG_DB = "/var/db/pkg"

# Output captured from a subprocess is truncated to this many chars.
OUTPUT_TAIL_CHARS = 200000
