from __future__ import annotations
import re
from typing import Iterable, List

_SAFE = re.compile(r"^[A-Za-z0-9@%+=:,./_-]+$")

def sh_quote(s: str) -> str:
    return "'" + s.replace("'", "'\"'\"'") + "'"

def sh_word(s: str) -> str:
    """Quotes only when the word would not survive the shell as-is."""
    return s if _SAFE.match(s) else sh_quote(s)

def sh_words(words: Iterable[str]) -> str:
    return " ".join(sh_word(w) for w in words)

def and_chain(cmds: List[str]) -> str:
    return " && ".join(cmds)

def seq_chain(cmds: List[str]) -> str:
    return "; ".join(cmds)

def group(line: str) -> str:
    return "{ " + line + "; }"

def comment(text: str) -> str:
    return "\n".join("# " + ln if ln.strip() else "#" for ln in text.splitlines() or [""])
