#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Pattern, Tuple, Union


@dataclass(frozen=True)
class SubstitutionRule:
    pattern: str
    replacement: Union[str, Callable[[re.Match], str]]
    regex: bool = False
    _compiled: Optional[Pattern[str]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.regex:
            object.__setattr__(self, "_compiled", re.compile(self.pattern, re.M))

    def apply(self, s: str) -> str:
        if self._compiled is not None:
            return self._compiled.sub(self.replacement, s)
        return s.replace(self.pattern, self.replacement)


def _tabs_for_spaces(m: re.Match) -> str:
    return m.group(0).replace("    ", "\t")


# C type keyword -> Go type name. "" is the "no value" return type.
TYPE_EQUIV: Mapping[str, str] = MappingProxyType({
    "int": "int",
    "void": "",
    "char": "string",
    "static int": "int",
    "static SDL_bool": "bool",
    "static SDL_BlitFunc": "BlitFunc",
    "static uint32": "uint32",
    "SDL_bool": "bool",
    "SDL_BlitFunc": "BlitFunc",
    "SDL_BlitInfo": "BlitInfo",
    "SDL_BlitMap": "BlitMap",
    "SDL_Surface": "Surface",
    "SDL_Rect": "Rect",
    "uint32": "uint32",
    "uint64": "uint64",
    "size_t": "uint",
    "float": "float32",
    "double": "float64",
    "long": "int64",
    "short": "int16",
})

# Applied once each, top to bottom. No replacement contains its own pattern or
# the pattern of a rule above it, so cleaning twice is the same as cleaning once.
LITERAL_RULES: Tuple[SubstitutionRule, ...] = (
    SubstitutionRule(r"^([ \t]*)#endif", r"\1//#endif", regex=True),
    SubstitutionRule(r"^([ \t]*)#else", r"\1//#else", regex=True),
    SubstitutionRule(r"^([ \t]*)#if", r"\1//#if", regex=True),
    SubstitutionRule(r"\bSDL_FALSE\b", "false", regex=True),
    SubstitutionRule(r"\bSDL_TRUE\b", "true", regex=True),
    SubstitutionRule(r"\bu_int64_t\b", "uint64", regex=True),
    SubstitutionRule(r"\bUint32\b", "uint32", regex=True),
    SubstitutionRule(r"\bNULL\b", "nil", regex=True),
    SubstitutionRule(r"\bconst\b[ \t]*", "", regex=True),
    SubstitutionRule(r"\bwhile\b", "for", regex=True),
    SubstitutionRule(r"\bmap\b", "Map", regex=True),
    SubstitutionRule(r"\bif\(", "if (", regex=True),
    SubstitutionRule("->", "."),
    SubstitutionRule("~", "^"),
    SubstitutionRule(r"^[ \t]+", _tabs_for_spaces, regex=True),
)


def resolve_type(name: str, table: Mapping[str, str] = TYPE_EQUIV) -> str:
    return table.get(name, name)


def _extract_literals(line: str) -> Tuple[str, List[str]]:
    out = []
    lits: List[str] = []
    i = 0
    n = len(line)

    def take_quoted(q: str, start: int) -> Optional[Tuple[str, int]]:
        j = start + 1
        while j < n:
            c = line[j]
            if c == "\\":
                j += 2
                continue
            if c == q:
                return (line[start : j + 1], j + 1)
            j += 1
        return None

    while i < n:
        c = line[i]
        if c in ("'", '"'):
            taken = take_quoted(c, i)
            if taken is None:
                # unclosed quote, e.g. an apostrophe in a comment
                out.append(c)
                i += 1
                continue
            lit, i2 = taken
            key = f"@@LIT{len(lits)}@@"
            lits.append(lit)
            out.append(key)
            i = i2
            continue
        out.append(c)
        i += 1

    return ("".join(out), lits)


def _restore_literals(line: str, lits: List[str]) -> str:
    for i, lit in enumerate(lits):
        line = line.replace(f"@@LIT{i}@@", lit)
    return line


def clean_line(s: str, rules: Tuple[SubstitutionRule, ...] = LITERAL_RULES) -> str:
    """Drop one trailing ';' and apply the literal rules outside of quotes."""
    if s.endswith(";"):
        s = s[:-1]
    masked, lits = _extract_literals(s)
    for rule in rules:
        masked = rule.apply(masked)
    return _restore_literals(masked, lits)
