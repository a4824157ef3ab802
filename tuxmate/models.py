from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

class Family(Enum):
    """Package-manager convention a distro uses."""
    APT = "apt"
    PACMAN = "pacman"
    DNF = "dnf"
    ZYPPER = "zypper"
    FLATPAK = "flatpak"
    SNAP = "snap"
    NIX = "nix"

class Mechanism(Enum):
    REPO = "repo"
    AUR = "aur"
    MANUAL = "manual"

class Helper(Enum):
    YAY = "yay"
    PARU = "paru"

class FocusType(Enum):
    CATEGORY = "category"
    APP = "app"

@dataclass(frozen=True)
class Distro:
    id: str
    name: str
    family: Family

@dataclass(frozen=True)
class InstallSpec:
    packages: Tuple[str, ...]
    mechanism: Mechanism = Mechanism.REPO
    prerequisite: bool = False
    note: str = ""

@dataclass(frozen=True)
class App:
    id: str
    name: str
    category: str
    desc: str = ""
    targets: Dict[str, InstallSpec] = field(default_factory=dict, compare=False, hash=False)

@dataclass(frozen=True)
class Category:
    name: str
    app_ids: Tuple[str, ...]

@dataclass(frozen=True)
class HelperPolicy:
    has_helper_installed: bool = False
    selected_helper: Helper = Helper.YAY

@dataclass(frozen=True)
class FocusState:
    focused_id: Optional[str] = None
    focused_type: Optional[FocusType] = None

    @property
    def idle(self) -> bool:
        return self.focused_type is None
