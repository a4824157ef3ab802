from __future__ import annotations
from typing import Optional, Set

from .catalog import Catalog

def filter_apps(catalog: Catalog, query: str) -> Optional[Set[str]]:
    """
    Ids of apps whose id, name or description contains ``query``
    (case-insensitive). A blank query means no filter: None.
    """
    q = (query or "").strip().lower()
    if not q:
        return None
    return {
        a.id for a in catalog.iter_apps()
        if q in a.id.lower() or q in a.name.lower() or q in a.desc.lower()
    }
