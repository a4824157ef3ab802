"""
Shared test fixtures: a small catalog built from a JSON-shaped dict.
"""

import copy

import pytest

from tuxmate.catalog import parse_catalog
from tuxmate.session import Session

CATALOG = {
    "ui": {"title": "tuxmate test"},
    "distros": [
        {"id": "arch", "name": "Arch Linux", "family": "pacman"},
        {"id": "ubuntu", "name": "Ubuntu", "family": "apt"},
        {"id": "snap", "name": "Snap", "family": "snap"},
        {"id": "nix", "name": "Nix", "family": "nix"},
    ],
    "categories": [
        {
            "name": "editors",
            "apps": [
                {
                    "id": "vim",
                    "name": "Vim",
                    "desc": "Modal text editor",
                    "targets": {"arch": "vim", "ubuntu": "vim", "snap": "vim-editor", "nix": "vim"},
                },
                {
                    "id": "sublime",
                    "name": "Sublime Text",
                    "desc": "Proprietary editor",
                    "targets": {
                        "arch": {"aur": "sublime-text"},
                        "snap": "sublime-text --classic",
                    },
                },
            ],
        },
        {
            "name": "tools",
            "apps": [
                {"id": "git", "name": "Git", "targets": {"arch": "git", "ubuntu": "git", "nix": "git"}},
                {
                    "id": "flatpak",
                    "name": "Flatpak",
                    "targets": {"ubuntu": {"packages": ["flatpak"], "prerequisite": True}},
                },
                {
                    "id": "slack",
                    "name": "Slack",
                    "targets": {
                        "arch": {"aur": "slack-desktop"},
                        "ubuntu": {"manual": "download the .deb from slack.com"},
                    },
                },
            ],
        },
        {"name": "empty", "apps": []},
    ],
}


@pytest.fixture
def catalog_data():
    """A fresh, mutable copy of the test catalog dict."""
    return copy.deepcopy(CATALOG)


@pytest.fixture
def catalog(catalog_data):
    return parse_catalog(catalog_data)


@pytest.fixture
def session(catalog):
    return Session(catalog, distro_id="arch")
