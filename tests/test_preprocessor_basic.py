"""
Basic preprocessor tests - single-level blocks and directive grammar

Tests passthrough of directive-free text, ifdef/ifndef selection, directive
line removal and which lines count as directives.
"""

import pytest

from ifdefpp.lib.preprocessor import preprocess


WORDS_SOURCE = """const words = [];
//@ifdef DEFINED
words.push('the', 'cake', 'is');
//@ifdef NOTDEFINED
words.push('the', 'truth');
//@endif
//@endif
//@ifndef DEFINED
words.push('not');
//@ifndef NOTDEFINED
words.push('maybe');
//@endif
//@endif
words.push('a', 'lie');
"""

WORDS_EXPECTED = """const words = [];
words.push('the', 'cake', 'is');
words.push('a', 'lie');
"""


class TestPassthrough:
    """Text without directives is returned unchanged"""

    def test_empty_source(self):
        """Empty string stays empty"""
        assert preprocess("", {}) == ""

    def test_plain_text_unchanged(self):
        """No directive lines means byte-for-byte identity"""
        source = "line 1\n\tline 2  \n\n// a comment\nlast line without newline"
        assert preprocess(source, {"DEFINED": True}) == source

    def test_crlf_text_unchanged(self):
        """Windows line endings survive untouched"""
        source = "a\r\nb\r\n"
        assert preprocess(source, {}) == source

    def test_definitions_irrelevant_without_directives(self):
        """The mapping is never consulted when there are no directives"""
        source = "x = 1\n"
        assert preprocess(source, {"x": True, "y": False}) == source


class TestTruthTable:
    """ifdef/ifndef selection against the definitions mapping"""

    def test_words_example(self):
        """Nested ifdef/ifndef pick out the documented sentence"""
        assert preprocess(WORDS_SOURCE, {"DEFINED": True}) == WORDS_EXPECTED

    def test_words_example_nothing_defined(self):
        """With nothing defined, only the ifndef branches survive"""
        expected = (
            "const words = [];\n"
            "words.push('not');\n"
            "words.push('maybe');\n"
            "words.push('a', 'lie');\n"
        )
        assert preprocess(WORDS_SOURCE, {}) == expected

    def test_ifdef_defined(self):
        """ifdef keeps its block when the variable is true"""
        source = "a\n//@ifdef X\nb\n//@endif\nc\n"
        assert preprocess(source, {"X": True}) == "a\nb\nc\n"

    def test_ifdef_undefined(self):
        """ifdef drops its block when the variable is unknown"""
        source = "a\n//@ifdef X\nb\n//@endif\nc\n"
        assert preprocess(source, {}) == "a\nc\n"

    def test_ifndef_defined(self):
        """ifndef drops its block when the variable is true"""
        source = "a\n//@ifndef X\nb\n//@endif\nc\n"
        assert preprocess(source, {"X": True}) == "a\nc\n"

    def test_ifndef_undefined(self):
        """ifndef keeps its block when the variable is unknown"""
        source = "a\n//@ifndef X\nb\n//@endif\nc\n"
        assert preprocess(source, {}) == "a\nb\nc\n"

    def test_falsy_values(self):
        """False, None, 0 and empty string all count as undefined"""
        source = "//@ifdef X\nkept\n//@endif\n"
        for value in (False, None, 0, 0.0, ""):
            assert preprocess(source, {"X": value}) == ""

    def test_truthy_values(self):
        """Non-empty strings (even "0") and non-zero numbers count as defined"""
        source = "//@ifdef X\nkept\n//@endif\n"
        for value in (True, 1, -1, 0.5, "0", "false", "yes"):
            assert preprocess(source, {"X": value}) == "kept\n"

    def test_variable_names_case_sensitive(self):
        """Names are looked up exactly as written"""
        source = "//@ifdef debug\nkept\n//@endif\n"
        assert preprocess(source, {"DEBUG": True}) == ""
        assert preprocess(source, {"debug": True}) == "kept\n"

    def test_hyphen_and_underscore_names(self):
        """Variable names may contain '-' and '_'"""
        source = "//@ifdef my-flag_2\nkept\n//@endif\n"
        assert preprocess(source, {"my-flag_2": True}) == "kept\n"

    def test_sibling_blocks(self):
        """Consecutive blocks are evaluated independently"""
        source = (
            "//@ifdef A\na\n//@endif\n"
            "//@ifdef B\nb\n//@endif\n"
            "//@ifndef A\nnot a\n//@endif\n"
        )
        assert preprocess(source, {"A": True}) == "a\n"
        assert preprocess(source, {"B": True}) == "b\nnot a\n"


class TestDirectiveLines:
    """Directive lines themselves never reach the output"""

    def test_directives_removed_when_included(self):
        """Included block loses only its directive lines"""
        source = "//@ifdef X\nbody\n//@endif\n"
        assert preprocess(source, {"X": True}) == "body\n"

    def test_empty_block(self):
        """A block with no content leaves nothing behind"""
        assert preprocess("//@ifdef X\n//@endif\n", {"X": True}) == ""
        assert preprocess("//@ifdef X\n//@endif\n", {}) == ""

    def test_directive_on_last_line_without_newline(self):
        """A final endif with no terminator is still removed"""
        source = "a\n//@ifdef X\nb\n//@endif"
        assert preprocess(source, {"X": True}) == "a\nb\n"
        assert preprocess(source, {}) == "a\n"

    def test_content_without_final_newline_kept(self):
        """Trailing content after the last directive is copied as-is"""
        source = "//@ifdef X\nb\n//@endif\ntail"
        assert preprocess(source, {}) == "tail"

    def test_crlf_directive_lines(self):
        """A CRLF directive line is removed together with its \\r\\n"""
        source = "a\r\n//@ifdef X\r\nb\r\n//@endif\r\nc\r\n"
        assert preprocess(source, {}) == "a\r\nc\r\n"
        assert preprocess(source, {"X": True}) == "a\r\nb\r\nc\r\n"

    def test_blank_lines_preserved(self):
        """Empty lines are content like any other"""
        source = "\n//@ifdef X\n\n//@endif\n\n"
        assert preprocess(source, {"X": True}) == "\n\n\n"
        assert preprocess(source, {}) == "\n\n"


class TestComments:
    """Ordinary // comments follow the same inclusion rule as code"""

    def test_comment_passthrough(self):
        """Comments outside blocks and in included blocks are kept"""
        source = (
            "// header comment\n"
            "//@ifdef A\n"
            "// inside A\n"
            "//@endif\n"
            "//@ifndef A\n"
            "// not A\n"
            "//@endif\n"
        )
        assert preprocess(source, {"A": True}) == "// header comment\n// inside A\n"
        assert preprocess(source, {}) == "// header comment\n// not A\n"

    def test_at_sign_comment_not_directive(self):
        """An @-comment with an unknown keyword is plain content"""
        source = "//@ifdef A\n//@todo fix me\n//@endif\n"
        assert preprocess(source, {"A": True}) == "//@todo fix me\n"
        assert preprocess(source, {}) == ""


class TestDirectiveGrammar:
    """Which lines are recognised as directives"""

    def test_indentation_and_inner_blanks(self):
        """Spaces and tabs are allowed around every part"""
        source = "  \t//  \t@ifdef \t X \t\nbody\n\t// @endif  \n"
        assert preprocess(source, {"X": True}) == "body\n"
        assert preprocess(source, {}) == ""

    def test_keyword_and_variable_need_no_blank(self):
        """The blank between keyword and variable may be empty"""
        source = "//@ifdefX\nbody\n//@endif\n"
        assert preprocess(source, {"X": True}) == "body\n"
        assert preprocess(source, {}) == ""

    @pytest.mark.parametrize("line", [
        "//@ifdef X // trailing comment",
        "//@ifdef X Y",
        "//@ifdef",
        "//@ifndef",
        "//@endif X",
        "//@endifX",
        "//@IFDEF X",
        "// ifdef X",
        "/@ifdef X",
        "#@ifdef X",
        "/* @ifdef X */",
        "code(); //@ifdef X",
        "//@ifdef X.Y",
        "//@ifdef Ünïcode",
    ])
    def test_non_directive_lines_are_content(self, line):
        """Lines that do not match the grammar exactly pass through"""
        source = f"before\n{line}\nafter\n"
        assert preprocess(source, {"X": True}) == source
        assert preprocess(source, {}) == source

    def test_unclosed_looking_line_does_not_open_block(self):
        """A disqualified ifdef line does not need an endif"""
        source = "//@ifdef X trailing\nbody\n"
        assert preprocess(source, {}) == source
