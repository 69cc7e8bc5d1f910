# -*- coding: utf-8 -*-
"""c2go driver tests"""

import pytest

from c2go import Config, Translator, render, translate_lines
from c2go_parser import ParseError
from c2go_rules import TYPE_EQUIV


class TestFunctions:
    def test_end_to_end(self):
        res = translate_lines(["int", "myFunc(int a, char *b) {", "    int x;", "}"])
        assert res.lines == ["func myFunc(a int, b *string) int {", "\tvar x int", "}"]
        assert res.advisories == []

    @pytest.mark.parametrize("key", sorted(TYPE_EQUIV))
    def test_every_return_type(self, key):
        res = translate_lines([key, "name() {"])
        eq = TYPE_EQUIV[key]
        if eq:
            assert res.lines == [f"func name() {eq} {{"]
        else:
            assert res.lines == ["func name() {"]

    def test_header_spanning_lines(self):
        src = [
            "static int",
            "blit(SDL_Surface *src,",
            "         SDL_Rect *r)",
            "{",
            "    return 0;",
            "}",
        ]
        res = translate_lines(src)
        assert res.lines == ["func blit(src *Surface, r *Rect) int {", "\treturn 0", "}"]

    def test_pointer_parameter(self):
        res = translate_lines(["void", "free_surface(SDL_Surface *s) {", "}"])
        assert res.lines == ["func free_surface(s *Surface) {", "}"]

    def test_body_rewrites(self):
        src = [
            "void",
            "run() {",
            "    while (p != NULL) {",
            "        p = p->next;",
            "    }",
            "}",
        ]
        assert translate_lines(src).lines == [
            "func run() {",
            "\tfor (p != nil) {",
            "\t\tp = p.next",
            "\t}",
            "}",
        ]

    def test_bad_parameter_aborts(self):
        with pytest.raises(ParseError) as exc:
            translate_lines(["void", "", "foo(int) {"])
        assert exc.value.line == 3
        assert exc.value.text == "int"

    def test_unterminated_header(self):
        with pytest.raises(ParseError) as exc:
            translate_lines(["int", "foo(int a,", "    int b)"])
        assert exc.value.line == 1

    def test_prototype_is_rejected(self):
        with pytest.raises(ParseError):
            translate_lines(["int", "foo(int a);"])


class TestLines:
    def test_includes_are_dropped(self):
        res = translate_lines(["#include <SDL.h>", "#include \"blit.h\"", "x = 1;"])
        assert res.lines == ["x = 1"]

    def test_directives_and_comments(self):
        res = translate_lines(["#if SDL_HAVE_BLIT_0", "// int x", "#endif"])
        assert res.lines == ["//#if SDL_HAVE_BLIT_0", "// int x", "//#endif"]

    def test_apostrophe_in_comment(self):
        res = translate_lines(["/* it's */ p = NULL;"])
        assert res.lines == ["/* it's */ p = nil"]

    def test_declarations(self):
        res = translate_lines(["    int a, b;", "    size_t n = 0;"])
        assert res.lines == ["\tvar a,b uint", "\tn := 0"]

    def test_lenient_config(self):
        res = translate_lines(["int a = b + c;"], Config(strict=False))
        assert res.lines == ["a := b"]

    def test_strict_by_default(self):
        with pytest.raises(ParseError) as exc:
            translate_lines(["", "int a = b + c;"])
        assert exc.value.line == 2


class TestAdvisories:
    def test_line_counts_package_line(self):
        res = translate_lines(["int x;", "if (x) return 1;"])
        assert res.lines == ["var x int", "if (x) return 1"]
        assert [a.line for a in res.advisories] == [3]
        assert str(res.advisories[0]) == "Potentially bad 'if' on line 3"

    def test_line_without_package(self):
        res = translate_lines(["int x;", "if (x) return 1;"], Config(package=""))
        assert [a.line for a in res.advisories] == [2]

    def test_lines_refer_to_output_not_input(self):
        src = ["#include <a.h>", "void", "f() {", "    if(x)", "        y();", "}"]
        res = translate_lines(src)
        assert res.lines[1] == "\tif (x)"
        assert [a.line for a in res.advisories] == [3]

    def test_braced_if_is_fine(self):
        assert translate_lines(["if (x) {", "}"]).advisories == []


class TestTranslator:
    def test_feed_and_finish(self):
        tr = Translator()
        tr.feed("int\n")
        assert tr.cur is not None
        tr.feed("f() {\r\n")
        assert tr.cur is None
        assert tr.finish().lines == ["func f() int {"]

    def test_custom_table(self):
        tr = Translator(table={"int": "int32", "void": ""})
        for ln in ["int", "f(int a) {", "    int b;", "}"]:
            tr.feed(ln)
        assert tr.finish().lines == ["func f(a int32) int32 {", "\tvar b int32", "}"]

    def test_render(self):
        res = translate_lines(["int x;"])
        assert render(res) == "package gdl\nvar x int\n"
        assert render(res, Config(package="blit")) == "package blit\nvar x int\n"
        assert render(res, Config(package="")) == "var x int\n"
