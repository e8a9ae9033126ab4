"""prompt_toolkit lexer for live Brook syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import Lexer as BrkLexer, LexError
from .token_types import TT

# highlight group -> prompt_toolkit style
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "constant": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansigray",
}

_TT_GROUP = {
    TT.LET: "keyword",
    TT.IF: "keyword",
    TT.ELSE: "keyword",
    TT.WHILE: "keyword",
    TT.FOR: "keyword",
    TT.FUN: "keyword",
    TT.RETURN: "keyword",
    TT.CLASS: "keyword",
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.NULL: "constant",
    TT.INTEGER: "number",
    TT.FLOAT: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.PLUS: "operator",
    TT.MINUS: "operator",
    TT.STAR: "operator",
    TT.SLASH: "operator",
    TT.EQ: "operator",
    TT.NEQ: "operator",
    TT.LT: "operator",
    TT.LTE: "operator",
    TT.GT: "operator",
    TT.GTE: "operator",
    TT.AND: "operator",
    TT.OR: "operator",
    TT.NEG: "operator",
    TT.ASSIGN: "operator",
    TT.LPAR: "punctuation",
    TT.RPAR: "punctuation",
    TT.LBRACE: "punctuation",
    TT.RBRACE: "punctuation",
    TT.DOT: "punctuation",
    TT.COMMA: "punctuation",
    TT.COLON: "punctuation",
    TT.SEMI: "punctuation",
}

_LAYOUT = {TT.NEWLINE, TT.EOF}


def highlight_line(text: str) -> StyleAndTextTuples:
    """Style one physical line; unscannable text comes back unstyled."""
    if not text:
        return [("", "")]

    try:
        tokens = BrkLexer(text).tokenize()
    except LexError:
        return [("", text)]

    result: StyleAndTextTuples = []
    pos = 0

    for tok in tokens:
        if tok.type in _LAYOUT:
            continue

        # Columns are 1-based and exact for single-line input.
        idx = tok.column - 1
        if idx < pos:
            continue

        if idx > pos:
            result.append(("", text[pos:idx]))

        style = GROUP_STYLE.get(_TT_GROUP.get(tok.type, ""), "")
        result.append((style, tok.lexeme))
        pos = idx + len(tok.lexeme)

    # Trailing text is whitespace or a comment.
    if pos < len(text):
        tail = text[pos:]
        style = GROUP_STYLE["comment"] if tail.lstrip().startswith("//") else ""
        result.append((style, tail))

    return result if result else [("", text)]


class BrookLexer(Lexer):
    """prompt_toolkit Lexer that highlights Brook source using the RD lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
