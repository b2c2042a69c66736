"""
Shared test fixtures and configuration.

Besides tree fixtures, this provides small parsers for the two
grammars the generator writes into: make's rule lines and recipe
lines (make ``$$`` collapse, then POSIX shell word splitting).
"""

import shlex
from pathlib import Path

import pytest


def make_words(line: str) -> list[str]:
    """Split a rule line the way GNU make reads target/prerequisite lists.

    make only removes a backslash in front of whitespace, ``#``, ``:``
    and the glob characters ``*?[`` (plus ``]`` in a word it globs);
    before anything else the backslash stays part of the name. ``$$`` is
    a literal ``$``, unescaped whitespace separates words and an
    unescaped ``:`` is its own word.
    """
    words: list[str] = []
    cur: list[str] = []
    globbed = False
    in_word = False

    def flush():
        nonlocal cur, globbed, in_word
        if in_word:
            word = "".join(cur)
            # \] is only unescaped by make's glob.
            words.append(word.replace("\0", "" if globbed else "\\"))
        cur, globbed, in_word = [], False, False

    i = 0
    while i < len(line):
        ch = line[i]
        nxt = line[i + 1:i + 2]
        if ch == "\\" and nxt and nxt in " #:*?[":
            cur.append(nxt)
            globbed = globbed or nxt in "*?["
            in_word = True
            i += 2
        elif ch == "\\" and nxt == "]":
            cur.append("\0]")
            in_word = True
            i += 2
        elif ch == "$" and nxt == "$":
            cur.append("$")
            in_word = True
            i += 2
        elif ch in " \t":
            flush()
            i += 1
        elif ch == ":":
            flush()
            words.append(":")
            i += 1
        else:
            cur.append(ch)
            globbed = globbed or ch in "*?["
            in_word = True
            i += 1
    flush()
    return words


def recipe_args(line: str) -> list[str]:
    """Arguments the shell receives for a tab-indented recipe line."""
    assert line.startswith("\t")
    return shlex.split(line[1:].replace("$$", "$"))


def parse_rules(text: str) -> list[tuple[str, str, list[str]]]:
    """Parse generated rule blocks into (target, prerequisite, argv)."""
    rules = []
    for block in text.split("\n\n"):
        if not block:
            continue
        target_line, recipe_line = block.split("\n")
        words = make_words(target_line)
        assert len(words) == 3 and words[1] == ":", words
        rules.append((words[0], words[2], recipe_args(recipe_line)))
    return rules


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def asset_tree(tmp_path: Path):
    """Factory: create files (relative paths) under a fresh tree root."""
    root = tmp_path / "site"
    root.mkdir()

    def _make(*paths: str) -> Path:
        for rel in paths:
            f = root / rel
            f.parent.mkdir(parents=True, exist_ok=True)
            f.write_text("<p>hi</p>\n")
        return root

    return _make


# Paths both grammars must reproduce exactly.
NASTY_PATHS = [
    "plain.html",
    "a b'c.html",
    " leading.js",
    "trailing .js",
    "two  spaces.css",
    'double"quote.html',
    "'''.html",
    "back\\slash.html",
    "a\\'b.html",
    "\\.html",
    "dollar$HOME.js",
    "$$.js",
    "$(rm -rf ~).js",
    "`tick`.js",
    "glob*?[x].css",
    "bracket].css",
    "paren(1).html",
    "amp&.html",
    "redir<in>out.svg",
    "#hash.xml",
    "per%cent.json",
    "co:lon.html",
    "~home.html",
    "ümlaut.html",
    "!bang{brace}.css",
    "dir/sub dir/x.html",
    "-dash.html",
    "comma,at@plus+.js",
]

# Paths the shell can take but a Makefile rule cannot express.
RULE_UNSUPPORTED_PATHS = [
    "",
    "new\nline.html",
    "cr\r.html",
    "tab\there.js",
    "key=value.css",
    "semi;colon.html",
    "pipe|bar.html",
    "~/tilde-dir.html",
    "glob*\\x.css",
    "back\\ space.html",
    "back\\#hash.html",
    "back\\:colon.html",
]
