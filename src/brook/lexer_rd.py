"""
Lexer for Brook

Tokenizes Brook source code into a stream of tokens.

Features:
- One pass, no backtracking
- Newlines kept as explicit statement terminators
- 1-based line and column on every token
- `//` line comments
"""

from typing import List

from .token_types import TT, Tok

# ============================================================================
# Errors
# ============================================================================

class LexError(Exception):
    """Scanner failure at a source position"""

    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, col {column}")

class InvalidCharacter(LexError):
    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"Unexpected character {char!r}", line, column)
        self.char = char

class UnterminatedString(LexError):
    def __init__(self, line: int, column: int):
        super().__init__("Unterminated string", line, column)

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """Brook lexer: source text in, EOF-terminated token list out."""

    KEYWORDS = {
        'let': TT.LET,
        'if': TT.IF,
        'else': TT.ELSE,
        'while': TT.WHILE,
        'for': TT.FOR,
        'fun': TT.FUN,
        'return': TT.RETURN,
        'class': TT.CLASS,
        'true': TT.TRUE,
        'false': TT.FALSE,
        'null': TT.NULL,
    }

    # Longest matches first
    OPERATORS = [
        # Two-character operators
        ('==', TT.EQ),
        ('!=', TT.NEQ),
        ('<=', TT.LTE),
        ('>=', TT.GTE),
        ('&&', TT.AND),
        ('||', TT.OR),

        # Single-character operators
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('*', TT.STAR),
        ('/', TT.SLASH),
        ('<', TT.LT),
        ('>', TT.GT),
        ('!', TT.NEG),
        ('=', TT.ASSIGN),
        ('(', TT.LPAR),
        (')', TT.RPAR),
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('.', TT.DOT),
        (',', TT.COMMA),
        (':', TT.COLON),
        (';', TT.SEMI),
    ]

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Tok] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Scan the whole source; the result always ends with one EOF token"""
        while self.pos < len(self.source):
            self.scan_token()

        self.emit(TT.EOF, '', self.line, self.column)
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        if self.skip_whitespace():
            return

        if self.peek() == '/' and self.peek(1) == '/':
            self.skip_comment()
            return

        if self.at_newline():
            self.scan_newline()
            return

        if self.peek() == '"':
            self.scan_string()
            return

        if self.peek().isdigit():
            self.scan_number()
            return

        if self.peek().isalpha() or self.peek() == '_':
            self.scan_identifier()
            return

        self.scan_operator()

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_newline(self):
        line, column = self.line, self.column
        if self.peek() == '\r':
            self.advance(2)  # CRLF
        else:
            self.advance()

        self.emit(TT.NEWLINE, '\n', line, column)
        self.line += 1
        self.column = 1

    def scan_string(self):
        """Scan string literal: "..." (no escapes, may span lines)"""
        start_line, start_col = self.line, self.column
        value = self.advance()  # Keep opening quote

        while self.pos < len(self.source) and self.peek() != '"':
            ch = self.advance()
            value += ch
            if ch == '\n':
                self.line += 1
                self.column = 1

        if self.pos >= len(self.source):
            raise UnterminatedString(start_line, start_col)

        value += self.advance()  # Closing quote
        self.emit(TT.STRING, value, start_line, start_col)

    def scan_number(self):
        """Scan number literal; `.digit` turns it into a float"""
        column = self.column
        value = ''

        while self.peek().isdigit():
            value += self.advance()

        if self.peek() == '.' and self.peek(1).isdigit():
            value += self.advance()
            while self.peek().isdigit():
                value += self.advance()
            self.emit(TT.FLOAT, value, self.line, column)
            return

        self.emit(TT.INTEGER, value, self.line, column)

    def scan_identifier(self):
        """Scan a name; reserved words map to their keyword kind"""
        column = self.column
        value = ''

        while self.peek().isalnum() or self.peek() == '_':
            value += self.advance()

        token_type = self.KEYWORDS.get(value, TT.IDENT)
        self.emit(token_type, value, self.line, column)

    def scan_operator(self):
        """Longest-match scan over OPERATORS"""
        column = self.column
        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                self.advance(len(op_str))
                self.emit(op_type, op_str, self.line, column)
                return

        raise InvalidCharacter(self.peek(), self.line, self.column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Character `offset` places ahead, or NUL past the end"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume `n` characters, keeping the column in step"""
        result = self.source[self.pos:self.pos + n]
        self.pos += n
        self.column += n
        return result

    def skip_whitespace(self) -> bool:
        """Skip blanks on the current line; newlines are tokens"""
        skipped = False
        while self.peek() in (' ', '\t') or (self.peek() == '\r' and self.peek(1) != '\n'):
            self.advance()
            skipped = True
        return skipped

    def skip_comment(self):
        """Drop a `//` comment, leaving the newline for scan_newline"""
        while self.pos < len(self.source) and not self.at_newline():
            self.advance()

    def at_newline(self) -> bool:
        return self.peek() == '\n' or (self.peek() == '\r' and self.peek(1) == '\n')

    def emit(self, token_type: TT, lexeme: str, line: int, column: int):
        self.tokens.append(Tok(type=token_type, lexeme=lexeme, line=line, column=column))


def tokenize(source: str) -> List[Tok]:
    """Scan `source` into an EOF-terminated token list"""
    return Lexer(source).tokenize()
