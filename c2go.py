#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""c2go: line-by-line C to Go rewriter.

Handles return types on their own line followed by "name(params) {", simple
variable declarations and a fixed set of literal/type renames. The output is
meant for manual review; anything outside that subset raises ParseError.
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

from c2go_parser import (
    ParseError,
    TranslationError,
    fix_func_header,
    fix_var_decl,
    is_include,
    is_line_comment,
    is_return_type_start,
    is_scope_open,
    is_suspicious_conditional,
    is_variable_declaration,
)
from c2go_rules import TYPE_EQUIV, clean_line, resolve_type


_SOURCE_EXTS = (".c", ".h")


@dataclass
class Config:
    package: str = "gdl"
    suffix: str = ".go"
    strict: bool = True


class FatalIOError(TranslationError):
    def __init__(self, path: str, err: OSError) -> None:
        super().__init__(f"{path}: {err.strerror or err}")
        self.path = path
        self.err = err


@dataclass
class Advisory:
    line: int
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class PendingHeader:
    return_type: str
    start_line: int
    text: str = ""


@dataclass
class TranslationResult:
    lines: List[str]
    advisories: List[Advisory] = field(default_factory=list)


class Translator:
    """Feeds source lines one at a time; call finish() once the input ends."""

    def __init__(self, cfg: Optional[Config] = None, table: Mapping[str, str] = TYPE_EQUIV) -> None:
        self.cfg = cfg or Config()
        self.table = table
        self.out: List[str] = []
        self.advisories: List[Advisory] = []
        self.cur: Optional[PendingHeader] = None
        self.line_no = 0
        # advisory line numbers refer to the written file, package line included
        self.line_base = 2 if self.cfg.package else 1

    def feed(self, raw: str) -> None:
        self.line_no += 1
        raw = raw.rstrip("\r\n")
        s = clean_line(raw)

        if self.cur is None:
            if is_return_type_start(s, self.table):
                self.cur = PendingHeader(
                    return_type=resolve_type(s, self.table),
                    start_line=self.line_no,
                )
                return
            self._emit(s)
            return

        self.cur.text += s
        if is_scope_open(s):
            cur = self.cur
            self.cur = None
            self.out.append(fix_func_header(cur.return_type, cur.text, self.line_no, self.table))
        elif raw.rstrip().endswith(";"):
            raise ParseError("function prototypes are not supported", _header_text(self.cur), self.line_no)

    def _emit(self, s: str) -> None:
        if is_include(s):
            return

        if not is_line_comment(s):
            if is_variable_declaration(s, self.table):
                s = fix_var_decl(s, self.cfg.strict, self.line_no, self.table)
            if is_suspicious_conditional(s):
                n = len(self.out) + self.line_base
                self.advisories.append(Advisory(n, f"Potentially bad 'if' on line {n}"))

        self.out.append(s)

    def finish(self) -> TranslationResult:
        if self.cur is not None:
            raise ParseError(
                "function header is never opened with '{'",
                _header_text(self.cur),
                self.cur.start_line,
            )
        return TranslationResult(lines=list(self.out), advisories=list(self.advisories))


def _header_text(cur: PendingHeader) -> str:
    return " ".join(cur.text.split())


def translate_lines(lines: Iterable[str], cfg: Optional[Config] = None) -> TranslationResult:
    tr = Translator(cfg)
    for ln in lines:
        tr.feed(ln)
    return tr.finish()


def render(res: TranslationResult, cfg: Optional[Config] = None) -> str:
    cfg = cfg or Config()
    out: List[str] = []
    if cfg.package:
        out.append(f"package {cfg.package}")
    out.extend(res.lines)
    return "\n".join(out) + "\n"


def _read_text_guess_encoding(path: str) -> str:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FatalIOError(path, e) from e

    if data.startswith(b"\xff\xfe"):
        return data[2:].decode("utf-16-le", errors="replace")
    if data.startswith(b"\xfe\xff"):
        return data[2:].decode("utf-16-be", errors="replace")
    if data.startswith(b"\xef\xbb\xbf"):
        data = data[3:]

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def read_source(path: str) -> List[str]:
    # split on "\n" only; splitlines() also breaks on \x0c and \x85
    lines = _read_text_guess_encoding(path).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [ln.rstrip("\r") for ln in lines]


def write_output(path: str, text: str) -> None:
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise FatalIOError(path, e) from e


def collect_input_paths(inp: str) -> List[str]:
    inp = os.path.abspath(inp)
    if os.path.isdir(inp):
        acc: List[str] = []
        for root, _, names in os.walk(inp):
            for n in names:
                if n.lower().endswith(_SOURCE_EXTS):
                    acc.append(os.path.join(root, n))
        acc.sort()
        return acc
    return [inp]


def translate_file(
    in_path: str,
    out_path: Optional[str] = None,
    cfg: Optional[Config] = None,
) -> Tuple[str, TranslationResult]:
    cfg = cfg or Config()
    lines = read_source(in_path)
    try:
        res = translate_lines(lines, cfg)
    except ParseError as e:
        e.path = in_path
        raise

    out_path = out_path or (in_path + cfg.suffix)
    write_output(out_path, render(res, cfg))
    return out_path, res


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="c2go")
    ap.add_argument("input", help="input .c file OR source directory")
    ap.add_argument("-o", "--output", default="", help="output path (single file only, default: INPUT + suffix)")
    ap.add_argument("--package", default="gdl", help="package name written on the first output line")
    ap.add_argument("--suffix", default=".go", help="suffix appended to each input path")
    ap.add_argument(
        "--no-strict",
        action="store_true",
        help="accept loose declarations instead of failing: truncate multi-token initializers, "
        "allow mixed pointer/value names and '(' in declarations",
    )
    ap.add_argument("--keep-going", action="store_true", help="report failing files and continue (directory input)")
    args = ap.parse_args(argv)

    cfg = Config(package=args.package, suffix=args.suffix, strict=not args.no_strict)

    paths = collect_input_paths(args.input)
    if not paths:
        raise SystemExit(f"[error] no C sources under {args.input}")
    if args.output and len(paths) != 1:
        raise SystemExit("[error] --output needs a single input file")

    multi = os.path.isdir(args.input)
    failed = 0
    for p in paths:
        try:
            out_path, res = translate_file(p, args.output or None, cfg)
        except TranslationError as e:
            if not args.keep_going:
                raise SystemExit(f"[error] {e}")
            print(f"[error] {e}", file=sys.stderr)
            failed += 1
            continue

        for adv in res.advisories:
            prefix = f"{p}: " if multi else ""
            print(f"{prefix}{adv}", file=sys.stderr)
        print(f"[ok] wrote {out_path}")

    if failed:
        raise SystemExit(f"[error] {failed} of {len(paths)} files failed")


if __name__ == "__main__":
    main()
