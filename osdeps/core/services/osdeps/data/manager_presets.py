"""
L0 Data — Package manager presets.

One entry per supported manager family:

    user_install  — command shown to the user (None: show ``auto_install``)
    auto_install  — command run unattended; ``%s`` marks the package slot
    needs_root    — run through the elevation helper
    needs_locking — serialize with every other osdeps process on the host
    inherit       — variables copied into the isolated root environment

Pure data. No logic.
"""

from __future__ import annotations

MANAGER_PRESETS: dict[str, dict] = {
    "emerge": {
        "user_install": ["emerge"],
        "auto_install": ["emerge", "--noreplace"],
        "needs_root": True,
        "needs_locking": True,
        "inherit": [],
    },
    "apt-dpkg": {
        "user_install": ["apt-get", "install"],
        "auto_install": [
            "env", "DEBIAN_FRONTEND=noninteractive",
            "apt-get", "install", "-y",
        ],
        "needs_root": True,
        "needs_locking": True,
        "inherit": ["DEBIAN_FRONTEND", "http_proxy", "https_proxy"],
    },
    "yum": {
        "user_install": ["yum", "install"],
        "auto_install": ["yum", "install", "-y"],
        "needs_root": True,
        "needs_locking": True,
        "inherit": [],
    },
    "dnf": {
        "user_install": ["dnf", "install"],
        "auto_install": ["dnf", "install", "-y"],
        "needs_root": True,
        "needs_locking": True,
        "inherit": [],
    },
    "zypper": {
        "user_install": ["zypper", "install"],
        "auto_install": ["zypper", "-n", "install"],
        "needs_root": True,
        "needs_locking": True,
        "inherit": [],
    },
    "pacman": {
        "user_install": ["pacman", "-Sy", "--needed"],
        "auto_install": ["pacman", "-Sy", "--needed", "--noconfirm"],
        "needs_root": True,
        "needs_locking": True,
        "inherit": [],
    },
    "pip": {
        "user_install": None,
        "auto_install": ["pip", "install", "--user"],
        "needs_root": False,
        "needs_locking": False,
        "inherit": [],
    },
    "gem": {
        "user_install": None,
        "auto_install": ["gem", "install", "--user-install"],
        "needs_root": False,
        "needs_locking": False,
        "inherit": [],
    },
}
