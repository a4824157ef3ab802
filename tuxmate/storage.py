from __future__ import annotations
import json, os
from typing import Any

CACHE_DIR = os.path.expanduser("~/.cache/tuxmate")
EXPORTS_DIR = os.path.join(CACHE_DIR, "exports")

def mkdirp(p: str) -> None:
    os.makedirs(p, exist_ok=True)

def load_json(path: str, default: Any) -> Any:
    """
    Missing or blank file -> default. Broken JSON raises ValueError.
    """
    if not os.path.exists(path):
        return default
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()
    if not raw.strip():
        return default
    return json.loads(raw)

def script_filename(distro_id: str) -> str:
    return f"tuxmate-{distro_id}.sh"

def write_script(directory: str, distro_id: str, text: str) -> str:
    """
    Writes an install script as <directory>/tuxmate-<distro>.sh, mode 0755.
    """
    mkdirp(directory)
    path = os.path.join(directory, script_filename(distro_id))
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    os.chmod(path, 0o755)
    return path
