from __future__ import annotations
import os
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .logger import get_logger
from .models import App, Category, Distro, Family, InstallSpec, Mechanism
from .storage import load_json

log = get_logger("catalog")

DEFAULT_CATALOG = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "catalog.json")

DEFAULT_UI = {"title": "tuxmate", "tagline": "Pick apps · get one install command"}

class CatalogError(ValueError):
    pass

class Catalog:
    """
    Read-only registry of distros, categories and apps.

    Also answers availability: an app without a target for a distro is simply
    not packaged there.
    """

    def __init__(self, distros: List[Distro], categories: List[Category], apps: List[App], ui: Optional[Dict[str, Any]] = None):
        self.distros: Tuple[Distro, ...] = tuple(distros)
        self.categories: Tuple[Category, ...] = tuple(categories)
        self.ui: Dict[str, Any] = dict(DEFAULT_UI)
        self.ui.update(ui or {})
        self._distros = {d.id: d for d in self.distros}
        self._categories = {c.name: c for c in self.categories}
        self._apps = {a.id: a for a in apps}
        # catalog order: category order, then app order inside the category
        self._rank: Dict[str, int] = {}
        for c in self.categories:
            for app_id in c.app_ids:
                self._rank[app_id] = len(self._rank)

    # ---------- lookups ----------
    def distro(self, distro_id: str) -> Optional[Distro]:
        return self._distros.get(distro_id)

    def category(self, name: str) -> Optional[Category]:
        return self._categories.get(name)

    def app(self, app_id: str) -> Optional[App]:
        return self._apps.get(app_id)

    def has_app(self, app_id: str) -> bool:
        return app_id in self._apps

    def app_ids(self) -> List[str]:
        return [a for c in self.categories for a in c.app_ids]

    def iter_apps(self) -> Iterator[App]:
        for app_id in self.app_ids():
            yield self._apps[app_id]

    def rank(self, app_id: str) -> int:
        return self._rank.get(app_id, len(self._rank))

    def in_catalog_order(self, app_ids) -> List[str]:
        return sorted((a for a in app_ids if a in self._apps), key=self.rank)

    # ---------- availability ----------
    def install_spec(self, app_id: str, distro_id: str) -> Optional[InstallSpec]:
        app = self._apps.get(app_id)
        if app is None:
            return None
        return app.targets.get(distro_id)

    def is_available(self, app_id: str, distro_id: str) -> bool:
        return self.install_spec(app_id, distro_id) is not None

# ---------- parsing ----------

def _packages(raw: Any) -> Tuple[str, ...]:
    if isinstance(raw, str):
        return tuple(raw.split())
    if isinstance(raw, (list, tuple)):
        return tuple(str(p).strip() for p in raw if str(p).strip())
    return ()

def parse_target(app_id: str, distro: Distro, raw: Any) -> InstallSpec:
    where = f"app {app_id!r} on {distro.id!r}"
    if isinstance(raw, str):
        spec = InstallSpec(packages=_packages(raw))
    elif isinstance(raw, dict):
        if "aur" in raw:
            spec = InstallSpec(packages=_packages(raw["aur"]), mechanism=Mechanism.AUR)
        elif "manual" in raw:
            spec = InstallSpec(packages=(), mechanism=Mechanism.MANUAL, note=str(raw["manual"]).strip())
        else:
            try:
                mech = Mechanism(str(raw.get("mechanism", "repo")).strip())
            except ValueError:
                raise CatalogError(f"{where}: unknown mechanism {raw.get('mechanism')!r}") from None
            spec = InstallSpec(
                packages=_packages(raw.get("packages", ())),
                mechanism=mech,
                prerequisite=bool(raw.get("prerequisite", False)),
                note=str(raw.get("note", "")).strip(),
            )
    else:
        raise CatalogError(f"{where}: target must be a string or an object")

    if spec.mechanism is Mechanism.AUR and distro.family is not Family.PACMAN:
        raise CatalogError(f"{where}: AUR packages need a pacman-family distro")
    if spec.mechanism is not Mechanism.MANUAL and not spec.packages:
        raise CatalogError(f"{where}: no packages given")
    return spec

def parse_distros(cfg: Dict[str, Any]) -> List[Distro]:
    out: List[Distro] = []
    seen = set()
    for d in cfg.get("distros", []) or []:
        if not isinstance(d, dict):
            raise CatalogError("distro must be an object")
        did = str(d.get("id", "")).strip()
        if not did:
            raise CatalogError("distro without id")
        if did in seen:
            raise CatalogError(f"duplicate distro id {did!r}")
        try:
            family = Family(str(d.get("family", "")).strip())
        except ValueError:
            raise CatalogError(f"distro {did!r}: unknown family {d.get('family')!r}") from None
        seen.add(did)
        out.append(Distro(id=did, name=str(d.get("name", did)).strip() or did, family=family))
    return out

def parse_catalog(cfg: Dict[str, Any]) -> Catalog:
    if not isinstance(cfg, dict):
        raise CatalogError("catalog must be a JSON object")
    distros = parse_distros(cfg)
    by_id = {d.id: d for d in distros}

    categories: List[Category] = []
    apps: List[App] = []
    seen: Dict[str, str] = {}
    for c in cfg.get("categories", []) or []:
        if not isinstance(c, dict):
            raise CatalogError("category must be an object")
        cname = str(c.get("name", "")).strip()
        if not cname:
            raise CatalogError("category without name")
        if any(x.name == cname for x in categories):
            raise CatalogError(f"duplicate category {cname!r}")
        ids: List[str] = []
        for it in c.get("apps", []) or []:
            if not isinstance(it, dict):
                raise CatalogError(f"category {cname!r}: app must be an object")
            aid = str(it.get("id", "")).strip()
            if not aid:
                raise CatalogError(f"category {cname!r}: app without id")
            if aid in seen:
                raise CatalogError(f"duplicate app id {aid!r} in {cname!r} (already in {seen[aid]!r})")
            targets: Dict[str, InstallSpec] = {}
            for did, raw in (it.get("targets", {}) or {}).items():
                if did not in by_id:
                    raise CatalogError(f"app {aid!r}: unknown distro {did!r}")
                targets[did] = parse_target(aid, by_id[did], raw)
            seen[aid] = cname
            ids.append(aid)
            apps.append(
                App(
                    id=aid,
                    name=str(it.get("name", aid)).strip() or aid,
                    category=cname,
                    desc=str(it.get("desc", "")).strip(),
                    targets=targets,
                )
            )
        categories.append(Category(name=cname, app_ids=tuple(ids)))

    return Catalog(distros, categories, apps, ui=cfg.get("ui") or {})

def load_catalog(path: Optional[str] = None) -> Catalog:
    path = path or DEFAULT_CATALOG
    try:
        cfg = load_json(path, {})
    except ValueError as e:
        raise CatalogError(f"{path}: {e}") from e
    except OSError as e:
        raise CatalogError(f"{path}: {e.strerror or e}") from e
    cat = parse_catalog(cfg)
    log.info("loaded catalog %s: %d distros, %d categories, %d apps",
             path, len(cat.distros), len(cat.categories), len(cat.app_ids()))
    return cat
