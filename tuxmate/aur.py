from __future__ import annotations
from typing import List

from .models import Distro, Family, Helper, HelperPolicy

AUR_URL = "https://aur.archlinux.org"

# prebuilt -bin variants, so bootstrapping does not pull in go/rust toolchains
HELPER_PACKAGES = {
    Helper.YAY: "yay-bin",
    Helper.PARU: "paru-bin",
}

BOOTSTRAP_DEPS = ("git", "base-devel")

def show_aur_ui(distro: Distro, has_aur_packages: bool) -> bool:
    return distro.family is Family.PACMAN and has_aur_packages

def needs_bootstrap(policy: HelperPolicy, has_aur_packages: bool) -> bool:
    return has_aur_packages and not policy.has_helper_installed

def build_dir(helper: Helper) -> str:
    return f"/tmp/{HELPER_PACKAGES[helper]}"

def bootstrap_commands(helper: Helper) -> List[str]:
    """
    Builds and installs the helper from its own AUR repository.
    Every command must succeed before any AUR install can run.
    """
    pkg = HELPER_PACKAGES[helper]
    d = build_dir(helper)
    return [
        f"sudo pacman -S {' '.join(BOOTSTRAP_DEPS)} --needed --noconfirm",
        f"rm -rf {d}",
        f"git clone {AUR_URL}/{pkg}.git {d}",
        f"(cd {d} && makepkg -si --noconfirm)",
        f"rm -rf {d}",
    ]

def parse_helper(value: str) -> Helper:
    """'yay'/'paru' (any case) -> Helper. Raises ValueError otherwise."""
    return Helper(value.strip().lower())
