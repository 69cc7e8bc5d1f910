#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Mapping, Optional

from c2go_rules import TYPE_EQUIV, clean_line, resolve_type


_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_IF_RE = re.compile(r"^if\b")


class TranslationError(Exception):
    pass


class ParseError(TranslationError):
    def __init__(self, msg: str, text: str = "", line: int = 0, path: str = "") -> None:
        super().__init__(msg)
        self.msg = msg
        self.text = text
        self.line = line
        self.path = path

    def __str__(self) -> str:
        loc = f"{self.path or '<input>'}:{self.line}"
        if self.text:
            return f"{loc}: {self.msg}: '{self.text}'"
        return f"{loc}: {self.msg}"


@dataclass
class Parameter:
    type_name: str
    name: str
    is_pointer: bool = False

    def render(self, table: Mapping[str, str] = TYPE_EQUIV) -> str:
        t = resolve_type(self.type_name, table)
        if self.is_pointer:
            return f"{self.name} *{t}"
        return f"{self.name} {t}"


@dataclass
class VariableDeclaration:
    type_name: str
    names: List[str]
    initializer: Optional[str] = None
    is_pointer: bool = False

    def render(self, table: Mapping[str, str] = TYPE_EQUIV) -> str:
        if self.initializer is not None:
            return f"{self.names[0]} := {self.initializer}"
        t = resolve_type(self.type_name, table)
        if self.is_pointer:
            t = "*" + t
        return f"var {','.join(self.names)} {t}".rstrip()


def is_return_type_start(s: str, table: Mapping[str, str] = TYPE_EQUIV) -> bool:
    return s in table


def is_scope_open(s: str) -> bool:
    return s.rstrip(" \t").endswith("{")


def is_line_comment(s: str) -> bool:
    return s.lstrip("\t").startswith("//")


def is_include(s: str) -> bool:
    return s.strip().startswith("#include")


def is_variable_declaration(s: str, table: Mapping[str, str] = TYPE_EQUIV) -> bool:
    spl = s.split()
    return bool(spl) and spl[0] in table


def is_suspicious_conditional(s: str) -> bool:
    t = s.strip(" \t")
    return bool(_IF_RE.match(t)) and not t.endswith("{")


def parse_param(param: str, line: int = 0) -> Optional[Parameter]:
    p = param.split()
    if not p:
        return None

    if len(p) == 2:
        t, n = p
        stars = 0
        if t.endswith("*"):
            t = t[:-1]
            stars += 1
        if n.startswith("*"):
            n = n[1:]
            stars += 1
        if stars > 1:
            raise ParseError("multiple indirection is not supported", param.strip(), line)
        p = [t, "*", n] if stars else [t, n]

    if len(p) == 3 and p[1] != "*":
        raise ParseError("could not parse parameter", param.strip(), line)
    if len(p) not in (2, 3):
        raise ParseError("could not parse parameter", param.strip(), line)

    t, n = p[0], p[-1]
    if not t or "*" in t or not _ID_RE.match(n):
        raise ParseError("could not parse parameter", param.strip(), line)
    return Parameter(type_name=t, name=n, is_pointer=(len(p) == 3))


# Turns "int *a" into "a *int"
def swap_type_and_name(param: str, line: int = 0, table: Mapping[str, str] = TYPE_EQUIV) -> str:
    pd = parse_param(param, line)
    if pd is None:
        return ""
    return pd.render(table)


def _find_closing_paren(s: str, open_i: int) -> int:
    depth = 0
    for i in range(open_i, len(s)):
        ch = s[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def fix_func_header(
    return_type: str,
    text: str,
    line: int = 0,
    table: Mapping[str, str] = TYPE_EQUIV,
) -> str:
    """Rewrite an accumulated "name(int a, char *b) {" header as a Go func line.

    return_type is already resolved; "" means the function returns nothing.
    """
    s = text.rstrip(" \t")
    if s.endswith("{"):
        s = s[:-1]

    open_i = s.find("(")
    if open_i < 0:
        raise ParseError("function header has no parameter list", text.strip(), line)
    name = s[:open_i].strip()
    if not name:
        raise ParseError("function header has no name", text.strip(), line)

    close_i = _find_closing_paren(s, open_i)
    if close_i < 0:
        raise ParseError("unbalanced parentheses in function header", text.strip(), line)

    tail = s[close_i + 1 :].strip()
    if tail:
        raise ParseError("unexpected text after parameter list", tail, line)

    params: List[str] = []
    for v in s[open_i + 1 : close_i].split(","):
        if not v.strip():
            continue
        params.append(swap_type_and_name(v, line, table))

    out = f"func {name}({', '.join(params)})"
    if return_type:
        out += " " + return_type
    out += " {"
    return clean_line(out)


def parse_var_decl(s: str, strict: bool = True, line: int = 0) -> VariableDeclaration:
    body = s.strip()

    if "=" in body:
        spl = body.replace(",", " ").split()
        if len(spl) < 4:
            raise ParseError("could not find initializer", body, line)
        if strict and (len(spl) != 4 or spl[2] != "="):
            raise ParseError("only 'type name = value' initializers are supported", body, line)
        name = spl[1][1:] if spl[1].startswith("*") else spl[1]
        return VariableDeclaration(type_name=spl[0], names=[name], initializer=spl[3])

    if strict and "(" in body:
        raise ParseError("return type must be on its own line", body, line)

    spl = body.replace(",", " ").split()
    names = spl[1:]
    if not names:
        raise ParseError("declaration without a variable name", body, line)

    ptr = [n.startswith("*") for n in names]
    if all(ptr):
        names = [n[1:] for n in names]
        if not all(names):
            raise ParseError("declaration without a variable name", body, line)
        return VariableDeclaration(type_name=spl[0], names=names, is_pointer=True)
    if strict and any(ptr):
        raise ParseError("mixed pointer and value declarations", body, line)
    return VariableDeclaration(type_name=spl[0], names=names)


def fix_var_decl(
    s: str,
    strict: bool = True,
    line: int = 0,
    table: Mapping[str, str] = TYPE_EQUIV,
) -> str:
    indent = s[: len(s) - len(s.lstrip(" \t"))]
    return indent + parse_var_decl(s, strict, line).render(table)
