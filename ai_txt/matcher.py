"""
Glob matching for training-path patterns.

Supported syntax:

* ``*``    any run of characters inside one path segment (no ``/``)
* ``**``   any run of characters including ``/`` (may be empty)
* ``/**/`` zero or more whole segments, so ``/a/**/e`` matches ``/a/e``
* everything else is literal

Patterns come from documents fetched off remote sites, so matching never
raises, refuses oversized input and never backtracks: a pattern is compiled
into a small automaton and the path is run through it once, tracking the
set of live states. Work is bounded by ``len(path) * len(pattern)``.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Set, Tuple

__all__ = ("glob_match", "compile_glob", "MAX_PATTERN_LENGTH", "MAX_PATH_LENGTH")

MAX_PATTERN_LENGTH = 1000
MAX_PATH_LENGTH = 2000

_TOKEN_RE = re.compile(r"(/\*\*/|\*\*|\*)")

# node kinds
_MATCH = 0
_SPLIT = 1  # epsilon edges to both targets
_LITERAL = 2  # one exact character
_SEGMENT = 3  # one character other than "/"
_ANY = 4  # one character

# (kind, literal char or None, next, alternative next for _SPLIT)
_Node = Tuple[int, Optional[str], int, int]
Program = Tuple[Tuple[_Node, ...], int]


def _add(nodes: List[Optional[_Node]], node: _Node) -> int:
    nodes.append(node)
    return len(nodes) - 1


def _star(nodes: List[Optional[_Node]], kind: int, out: int) -> int:
    """Zero or more characters of *kind*, then continue at *out*."""
    split = _add(nodes, None)
    body = _add(nodes, (kind, None, split, -1))
    nodes[split] = (_SPLIT, None, body, out)
    return split


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> Program:
    """Compile *pattern* into ``(nodes, start)``; built back to front."""
    nodes: List[Optional[_Node]] = [(_MATCH, None, -1, -1)]
    nxt = 0
    for token in reversed(_TOKEN_RE.split(pattern)):
        if token == "*":
            nxt = _star(nodes, _SEGMENT, nxt)
        elif token == "**":
            nxt = _star(nodes, _ANY, nxt)
        elif token == "/**/":
            # "/" or "/" + one or more characters + "/"
            closing = _add(nodes, (_LITERAL, "/", nxt, -1))
            rest = _star(nodes, _ANY, closing)
            first = _add(nodes, (_ANY, None, rest, -1))
            opening = _add(nodes, (_LITERAL, "/", first, -1))
            nxt = _add(nodes, (_SPLIT, None, opening, closing))
        else:
            for char in reversed(token):
                nxt = _add(nodes, (_LITERAL, char, nxt, -1))
    return tuple(nodes), nxt


def _closure(nodes: Tuple[_Node, ...], states: List[int]) -> Set[int]:
    """Follow epsilon edges; only consuming and match nodes are kept."""
    seen: Set[int] = set()
    live: Set[int] = set()
    stack = list(states)
    while stack:
        index = stack.pop()
        if index in seen:
            continue
        seen.add(index)
        kind, _, nxt, alt = nodes[index]
        if kind == _SPLIT:
            stack.append(nxt)
            stack.append(alt)
        else:
            live.add(index)
    return live


def _step(nodes: Tuple[_Node, ...], live: Set[int], char: str) -> Set[int]:
    targets = []
    for index in live:
        kind, literal, nxt, _ = nodes[index]
        if kind == _ANY or (kind == _SEGMENT and char != "/") or (kind == _LITERAL and char == literal):
            targets.append(nxt)
    return _closure(nodes, targets)


def glob_match(path: str, pattern: str) -> bool:
    """Return True if the whole *path* matches *pattern*."""
    if not isinstance(path, str) or not isinstance(pattern, str):
        return False
    if len(pattern) > MAX_PATTERN_LENGTH or len(path) > MAX_PATH_LENGTH:
        return False

    nodes, start = compile_glob(pattern)
    live = _closure(nodes, [start])
    for char in path:
        if not live:
            return False
        live = _step(nodes, live, char)
    return 0 in live
