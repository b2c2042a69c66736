"""
Path escaping — one path, two grammars.

A discovered file path ends up in two places of the generated Makefile:

    <rule token>.gz: <rule token>               ← make's rule grammar
    	zopfli --i127 <command token>            ← /bin/sh, via make

Both tokens come from the same primitive, ``shell_escape``, so they
cannot drift apart. The rule variant post-processes its output, because
GNU make only removes a backslash in front of a few characters:

    space # :        word / comment / rule separators  → \\c kept
    * ? [            glob characters                   → \\c kept
    ]                only inside a glob word           → \\c kept
    $                variable reference                → $$
    everything else  ordinary to make                  → backslash dropped

So ``paren(1).html``, ``it's.html`` and ``per%cent.json`` are written
literally, while ``a b.html`` becomes ``a\\ b.html``.

Some paths have no rule token at all and raise ``UnsupportedPathError``:
newline, carriage return and tab; ``=`` (variable assignment), ``;``
(inline recipe) and ``|`` (order-only marker); a leading ``~`` directory
(tilde expansion); and a literal backslash in front of a character make
unescapes, or anywhere in a name make will glob.
"""

from __future__ import annotations

import re
import string
from collections.abc import Iterable

from genmakefile.core.errors import UnsupportedPathError

# Same safe set as shlex.quote: these never need escaping in sh.
_SHELL_SAFE = frozenset(string.ascii_letters + string.digits + "_@%+=:,./-")

# Characters make reads a backslash in front of.
_MAKE_ESCAPED = frozenset(" #:*?[")
_MAKE_GLOB = frozenset("*?[")

# Either an escape pair produced by shell_escape, or ':' which the
# shell leaves bare.
_RULE_FIXUP = re.compile(r"\\(.)|(:)", re.DOTALL)

_RULE_UNSUPPORTED: dict[str, str] = {
    "\n": "newline cannot be expressed in a Makefile rule",
    "\r": "carriage return cannot be expressed in a Makefile rule",
    "\t": "make does not unescape a tab in a file name",
    "=": "'=' makes make read the rule as a variable assignment",
    ";": "';' starts an inline recipe in a rule line",
    "|": "'|' separates order-only prerequisites",
}


def shell_escape(s: str) -> str:
    """Escape ``s`` so a POSIX shell reads it back as exactly one word.

    Works like bash's ``printf %q``: every character outside the safe
    set gets a backslash. A newline is the exception, because
    backslash-newline is a line continuation; it is single-quoted
    instead. The empty string becomes ``''``.
    """
    if not s:
        return "''"

    out: list[str] = []
    for ch in s:
        if ch in _SHELL_SAFE:
            out.append(ch)
        elif ch == "\n":
            out.append("'\n'")
        else:
            out.append("\\" + ch)
    return "".join(out)


def to_command_token(path: str) -> str:
    """Escape ``path`` for use as one argument in a shell command."""
    return shell_escape(path)


def check_rule_path(path: str) -> None:
    """Raise ``UnsupportedPathError`` if ``path`` has no rule token."""
    if not path:
        raise UnsupportedPathError(path, "empty path")
    for ch, reason in _RULE_UNSUPPORTED.items():
        if ch in path:
            raise UnsupportedPathError(path, reason)
    if path.startswith("~") and "/" in path:
        raise UnsupportedPathError(path, "make applies tilde expansion to a leading '~' directory")

    if "\\" in path:
        if _MAKE_GLOB & set(path):
            raise UnsupportedPathError(path, "make's glob would consume the backslash")
        for ch, nxt in zip(path, path[1:]):
            if ch == "\\" and nxt in _MAKE_ESCAPED:
                raise UnsupportedPathError(path, f"backslash before {nxt!r} is ambiguous to make")


def to_rule_token(path: str) -> str:
    """Escape ``path`` for use as a make target or prerequisite name.

    Raises:
        UnsupportedPathError: see ``check_rule_path``.
    """
    check_rule_path(path)

    kept = _MAKE_ESCAPED
    if _MAKE_GLOB & set(path):
        kept = kept | {"]"}

    def fix(m: re.Match[str]) -> str:
        escaped = m.group(1)
        if escaped is None:
            return "\\" + m.group(2)
        if escaped == "$":
            return "$$"
        if escaped in kept:
            return m.group(0)
        return escaped

    return _RULE_FIXUP.sub(fix, shell_escape(path))


def to_recipe_line(words: Iterable[str]) -> str:
    """Serialize command words into one tab-indented recipe line.

    make expands ``$`` in recipes before the shell sees them, so every
    ``$`` is doubled here. This is the only place an argument vector
    turns into text.
    """
    return "\t" + " ".join(words).replace("$", "$$")
