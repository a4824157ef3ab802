"""
Install command and script generation.

Both outputs come from one partition of the selection, so they always agree.
Generation is a pure function of (distro, selected ids, helper policy, join
policies): the same inputs give byte-identical text.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Collection, Dict, List, Mapping, Optional, Tuple

from . import aur
from .catalog import Catalog
from .models import App, Distro, Family, HelperPolicy, InstallSpec, Mechanism
from .shell import and_chain, comment, group, seq_chain, sh_quote, sh_words

class JoinPolicy(Enum):
    """How the commands of one install step are chained."""
    ALL_OR_NOTHING = "&&"
    CONTINUE_ON_FAILURE = ";"

@dataclass(frozen=True)
class Convention:
    install: str                  # "{pkgs}" is replaced by the package words
    refresh: Optional[str] = None
    per_package: bool = False     # one command per app instead of one for all
    prefix: str = ""              # prepended to every package name

CONVENTIONS: Dict[Family, Convention] = {
    Family.APT: Convention("sudo apt install -y {pkgs}", refresh="sudo apt update"),
    Family.DNF: Convention("sudo dnf install -y {pkgs}"),
    Family.ZYPPER: Convention("sudo zypper install -y {pkgs}"),
    Family.PACMAN: Convention("sudo pacman -S {pkgs} --needed --noconfirm"),
    Family.FLATPAK: Convention("flatpak install -y flathub {pkgs}"),
    Family.SNAP: Convention("sudo snap install {pkgs}", per_package=True),
    Family.NIX: Convention("nix-env -iA {pkgs}", prefix="nixpkgs."),
}

# snaps are installed one by one; a missing snap should not stop the rest
DEFAULT_JOIN_POLICIES: Dict[Family, JoinPolicy] = {
    Family.SNAP: JoinPolicy.CONTINUE_ON_FAILURE,
}

EMPTY = ""

Entry = Tuple[App, InstallSpec]

@dataclass(frozen=True)
class Partition:
    distro: Distro
    prerequisites: Tuple[Entry, ...] = ()
    repo: Tuple[Entry, ...] = ()
    aur: Tuple[Entry, ...] = ()
    manual: Tuple[Entry, ...] = ()
    apps: Tuple[App, ...] = ()    # every included app, catalog order

    @property
    def has_aur_packages(self) -> bool:
        return bool(self.aur)

    @property
    def empty(self) -> bool:
        return not (self.prerequisites or self.repo or self.aur or self.manual)

@dataclass(frozen=True)
class Step:
    label: str
    commands: Tuple[str, ...]
    join: JoinPolicy = JoinPolicy.ALL_OR_NOTHING
    units: Tuple[str, ...] = ()   # what each command installs, for failure messages

    def line(self, standalone: bool) -> str:
        if self.join is JoinPolicy.ALL_OR_NOTHING or len(self.commands) == 1:
            return and_chain(list(self.commands))
        chained = seq_chain(list(self.commands))
        return chained if standalone else group(chained)

    def script_lines(self) -> List[str]:
        if self.join is JoinPolicy.ALL_OR_NOTHING:
            return list(self.commands)
        return [
            f"{cmd} || echo {sh_quote('tuxmate: could not install ' + unit)} >&2"
            for cmd, unit in zip(self.commands, self.units)
        ]

@dataclass(frozen=True)
class Output:
    command: str
    script: str
    has_aur_packages: bool
    show_aur_ui: bool
    aur_app_names: Tuple[str, ...]
    included: Tuple[str, ...]     # app ids that made it into the output
    excluded: Tuple[str, ...]     # selected but not packaged for the distro

def partition(catalog: Catalog, distro: Distro, selected: Collection[str]) -> Tuple[Partition, List[str]]:
    """
    Splits the selection by install mechanism, in catalog order.
    Returns the partition and the selected ids that are unavailable on ``distro``.
    """
    groups: Dict[str, List[Entry]] = {"pre": [], "repo": [], "aur": [], "manual": []}
    included: List[App] = []
    missing: List[str] = []
    for app_id in catalog.in_catalog_order(selected):
        spec = catalog.install_spec(app_id, distro.id)
        if spec is None:
            missing.append(app_id)
            continue
        app = catalog.app(app_id)
        included.append(app)
        entry = (app, spec)
        if spec.mechanism is Mechanism.AUR:
            groups["aur"].append(entry)
        elif spec.mechanism is Mechanism.MANUAL:
            groups["manual"].append(entry)
        elif spec.prerequisite:
            groups["pre"].append(entry)
        else:
            groups["repo"].append(entry)
    part = Partition(
        distro=distro,
        prerequisites=tuple(groups["pre"]),
        repo=tuple(groups["repo"]),
        aur=tuple(groups["aur"]),
        manual=tuple(groups["manual"]),
        apps=tuple(included),
    )
    return part, missing

def _install_step(label: str, conv: Convention, entries: Tuple[Entry, ...], join: JoinPolicy) -> Step:
    units = [tuple(conv.prefix + p if not p.startswith("-") else p for p in spec.packages) for _, spec in entries]
    if conv.per_package or join is JoinPolicy.CONTINUE_ON_FAILURE:
        cmds = tuple(conv.install.format(pkgs=sh_words(u)) for u in units)
        return Step(label, cmds, join, tuple(app.name for app, _ in entries))
    words = [w for u in units for w in u]
    return Step(label, (conv.install.format(pkgs=sh_words(words)),))

def build_steps(part: Partition, policy: HelperPolicy, join_policies: Optional[Mapping[Family, JoinPolicy]] = None) -> List[Step]:
    family = part.distro.family
    conv = CONVENTIONS[family]
    joins = dict(DEFAULT_JOIN_POLICIES)
    joins.update(join_policies or {})
    join = joins.get(family, JoinPolicy.ALL_OR_NOTHING)

    steps: List[Step] = []
    installs = part.prerequisites or part.repo
    if aur.needs_bootstrap(policy, part.has_aur_packages):
        helper = policy.selected_helper
        steps.append(Step(f"AUR helper: {helper.value}", tuple(aur.bootstrap_commands(helper))))
    if conv.refresh and installs:
        steps.append(Step("Refresh package lists", (conv.refresh,)))
    if part.prerequisites:
        steps.append(_install_step("Prerequisites", conv, part.prerequisites, join))
    if part.repo:
        steps.append(_install_step("Packages", conv, part.repo, join))
    if part.aur:
        helper = policy.selected_helper.value
        aur_conv = Convention(helper + " -S {pkgs} --needed --noconfirm")
        steps.append(_install_step(f"AUR packages ({helper})", aur_conv, part.aur, join))
    return steps

def render_command(steps: List[Step]) -> str:
    if not steps:
        return EMPTY
    standalone = len(steps) == 1
    return and_chain([s.line(standalone) for s in steps])

def render_script(part: Partition, steps: List[Step]) -> str:
    if part.empty:
        return EMPTY
    d = part.distro
    names = [a.name for a in part.apps]
    out: List[str] = [
        "#!/usr/bin/env bash",
        f"# Install script for {d.name}, generated by tuxmate",
        comment("Apps: " + ", ".join(names)),
        "",
        "set -e",
    ]
    for s in steps:
        out.append("")
        out.append(comment(s.label))
        out.extend(s.script_lines())
    if part.manual:
        out.append("")
        out.append(comment("Manual installation (not automated)"))
        for app, spec in part.manual:
            out.append(comment(f"{app.name}: {spec.note or 'see the project website'}"))
    notes = [(app, spec) for app, spec in part.prerequisites + part.repo + part.aur if spec.note]
    if notes:
        out.append("")
        out.append(comment("Notes"))
        for app, spec in notes:
            out.append(comment(f"{app.name}: {spec.note}"))
    return "\n".join(out) + "\n"

def generate(
    catalog: Catalog,
    distro_id: str,
    selected: Collection[str],
    policy: Optional[HelperPolicy] = None,
    join_policies: Optional[Mapping[Family, JoinPolicy]] = None,
) -> Output:
    """
    Never raises for any selection: unknown distro or nothing installable
    yields empty text.
    """
    policy = policy or HelperPolicy()
    distro = catalog.distro(distro_id)
    if distro is None:
        return Output(EMPTY, EMPTY, False, False, (), (), tuple(catalog.in_catalog_order(selected)))
    part, missing = partition(catalog, distro, selected)
    steps = build_steps(part, policy, join_policies)
    return Output(
        command=render_command(steps),
        script=render_script(part, steps),
        has_aur_packages=part.has_aur_packages,
        show_aur_ui=aur.show_aur_ui(distro, part.has_aur_packages),
        aur_app_names=tuple(app.name for app, _ in part.aur),
        included=tuple(a.id for a in part.apps),
        excluded=tuple(missing),
    )
