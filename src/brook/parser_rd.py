"""
Recursive Descent Parser for Brook

Structure:
- Statements: plain recursive descent, one token of lookahead
- Expressions: precedence climbing (Pratt) with one prefix and one infix
  dispatch, both keyed on the token kind
- AST: frozen dataclasses from `tree`
"""

import math
from enum import IntEnum
from typing import List, Optional

from .lexer_rd import tokenize
from .token_types import TT, Tok
from .tree import (
    Assign, Binary, Block, BooleanLiteral, Call, Expr, ExpressionStmt, FloatLiteral,
    For, FunctionDecl, Identifier, IfExpr, IntegerLiteral, LetStmt, NullLiteral,
    Program, Stmt, StringLiteral, Unary, While,
)
from .types import INT_MAX

# ============================================================================
# Errors
# ============================================================================

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, token: Optional[Tok] = None):
        self.message = message
        self.token = token
        self.line = token.line if token else None
        self.column = token.column if token else None
        super().__init__(
            f"{message} at line {token.line}, col {token.column}" if token else message
        )

class UnexpectedToken(ParseError):
    def __init__(self, found: Tok, expected: str):
        super().__init__(f"Expected {expected}, got {_describe(found)}", found)
        self.found = found
        self.expected = expected

class InvalidAssignmentTarget(ParseError):
    def __init__(self, token: Tok):
        super().__init__("Invalid assignment target", token)

class NoPrefixRule(ParseError):
    def __init__(self, token: Tok):
        super().__init__(f"No prefix parse rule for {_describe(token)}", token)

class NoInfixContinuation(ParseError):
    def __init__(self, token: Tok):
        super().__init__(f"No infix parse rule for {_describe(token)}", token)

class MalformedNumericLiteral(ParseError):
    def __init__(self, token: Tok):
        super().__init__(f"Malformed numeric literal {token.lexeme!r}", token)
        self.text = token.lexeme

def _describe(tok: Tok) -> str:
    if tok.type in (TT.EOF, TT.NEWLINE):
        return tok.type.name
    return f"{tok.type.name} {tok.lexeme!r}"

# ============================================================================
# Precedence
# ============================================================================

class Prec(IntEnum):
    LOWEST = 0
    ASSIGN = 1
    OR = 2
    AND = 3
    EQUALITY = 4
    COMPARISON = 5
    SUM = 6
    PRODUCT = 7
    PREFIX = 8
    CALL = 9

INFIX_PRECEDENCE = {
    TT.ASSIGN: Prec.ASSIGN,
    TT.OR: Prec.OR,
    TT.AND: Prec.AND,
    TT.EQ: Prec.EQUALITY,
    TT.NEQ: Prec.EQUALITY,
    TT.LT: Prec.COMPARISON,
    TT.GT: Prec.COMPARISON,
    TT.LTE: Prec.COMPARISON,
    TT.GTE: Prec.COMPARISON,
    TT.PLUS: Prec.SUM,
    TT.MINUS: Prec.SUM,
    TT.STAR: Prec.PRODUCT,
    TT.SLASH: Prec.PRODUCT,
    TT.LPAR: Prec.CALL,
}

# ============================================================================
# Parser
# ============================================================================

class Parser:
    """
    Parser for Brook.

    Expression precedence (lowest to highest):
    1. assignment (=), right associative
    2. or (||)
    3. and (&&)
    4. equality (==, !=)
    5. comparison (<, >, <=, >=)
    6. sum (+, -)
    7. product (*, /)
    8. prefix (-, !)
    9. call (f(...))
    """

    def __init__(self, tokens: List[Tok]):
        if not tokens or tokens[-1].type != TT.EOF:
            last_line = tokens[-1].line if tokens else 1
            tokens = list(tokens) + [Tok(TT.EOF, '', last_line, 0)]
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0]

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        prev = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        self.current = self.tokens[self.pos]
        return prev

    def check(self, *types: TT) -> bool:
        return self.current.type in types

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def expect(self, token_type: TT, what: Optional[str] = None) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            raise UnexpectedToken(self.current, what or token_type.name)
        return self.advance()

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Program:
        """Parse entire program"""
        stmts: List[Stmt] = []

        while not self.check(TT.EOF):
            if self.match(TT.NEWLINE, TT.SEMI):
                continue
            stmts.append(self.parse_statement())

        return Program(tuple(stmts), line=1)

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Stmt:
        match self.current.type:
            case TT.LET:
                return self.parse_let_stmt()
            case TT.LBRACE:
                return self.parse_block()
            case TT.WHILE:
                return self.parse_while_stmt()
            case TT.FOR:
                return self.parse_for_stmt()
            case TT.FUN:
                return self.parse_fun_decl()
            case _:
                return self.parse_expr_stmt()

    def parse_expr_stmt(self) -> ExpressionStmt:
        """expr, ended by a newline, ';', EOF or the enclosing '}'"""
        line = self.current.line
        expr = self.parse_expression()

        if not self.check(TT.NEWLINE, TT.SEMI, TT.EOF, TT.RBRACE):
            raise UnexpectedToken(self.current, "end of statement")

        return ExpressionStmt(expr, line=line)

    def parse_let_stmt(self) -> LetStmt:
        """let IDENT [= expr]"""
        let_tok = self.expect(TT.LET)
        name = self.expect(TT.IDENT, "variable name after 'let'")

        initializer = None
        if self.match(TT.ASSIGN):
            initializer = self.parse_expression()

        return LetStmt(name.lexeme, initializer, line=let_tok.line)

    def parse_block(self) -> Block:
        """{ statement* }"""
        lbrace = self.expect(TT.LBRACE, "'{'")
        stmts: List[Stmt] = []

        while not self.check(TT.RBRACE):
            if self.check(TT.EOF):
                raise UnexpectedToken(self.current, "'}'")
            if self.match(TT.NEWLINE, TT.SEMI):
                continue
            stmts.append(self.parse_statement())

        self.advance()
        return Block(tuple(stmts), line=lbrace.line)

    def parse_while_stmt(self) -> While:
        """while expr block"""
        while_tok = self.expect(TT.WHILE)
        cond = self.parse_expression()
        body = self.parse_block()
        return While(cond, body, line=while_tok.line)

    def parse_for_stmt(self) -> For:
        """for letStmt ; expr ; expr block"""
        for_tok = self.expect(TT.FOR)
        if not self.check(TT.LET):
            raise UnexpectedToken(self.current, "'let' initializer in for loop")
        init = self.parse_let_stmt()
        self.expect(TT.SEMI, "';' after for-loop initializer")
        cond = self.parse_expression()
        self.expect(TT.SEMI, "';' after for-loop condition")
        increment = self.parse_expression()
        body = self.parse_block()
        return For(init, cond, increment, body, line=for_tok.line)

    def parse_fun_decl(self) -> FunctionDecl:
        """fun IDENT ( [IDENT {, IDENT}] ) block"""
        fun_tok = self.expect(TT.FUN)
        name = self.expect(TT.IDENT, "function name")
        self.expect(TT.LPAR, "'(' after function name")

        params: List[str] = []
        if not self.check(TT.RPAR):
            params.append(self.expect(TT.IDENT, "parameter name").lexeme)
            while self.match(TT.COMMA):
                params.append(self.expect(TT.IDENT, "parameter name").lexeme)

        self.expect(TT.RPAR, "')' after parameters")
        body = self.parse_block()
        return FunctionDecl(name.lexeme, tuple(params), body, line=fun_tok.line)

    # ========================================================================
    # Expressions (precedence climbing)
    # ========================================================================

    def parse_expression(self, precedence: Prec = Prec.LOWEST) -> Expr:
        left = self.parse_prefix()

        while INFIX_PRECEDENCE.get(self.current.type, Prec.LOWEST) > precedence:
            left = self.parse_infix(left)

        return left

    def parse_prefix(self) -> Expr:
        tok = self.current

        match tok.type:
            case TT.IDENT:
                self.advance()
                return Identifier(tok.lexeme, line=tok.line)
            case TT.INTEGER:
                self.advance()
                return IntegerLiteral(self._integer_value(tok), line=tok.line)
            case TT.FLOAT:
                self.advance()
                return FloatLiteral(self._float_value(tok), line=tok.line)
            case TT.STRING:
                self.advance()
                return StringLiteral(tok.lexeme[1:-1], line=tok.line)
            case TT.TRUE | TT.FALSE:
                self.advance()
                return BooleanLiteral(tok.type == TT.TRUE, line=tok.line)
            case TT.NULL:
                self.advance()
                return NullLiteral(line=tok.line)
            case TT.MINUS | TT.NEG:
                self.advance()
                operand = self.parse_expression(Prec.PREFIX)
                return Unary(tok.type, operand, line=tok.line)
            case TT.LPAR:
                self.advance()
                inner = self.parse_expression()
                self.expect(TT.RPAR, "')'")
                return inner
            case TT.IF:
                return self.parse_if_expr()
            case _:
                raise NoPrefixRule(tok)

    def parse_infix(self, left: Expr) -> Expr:
        tok = self.current

        match tok.type:
            case TT.ASSIGN:
                if not isinstance(left, Identifier):
                    raise InvalidAssignmentTarget(tok)
                self.advance()
                value = self.parse_expression(Prec.LOWEST)
                return Assign(left.name, value, line=tok.line)
            case TT.LPAR:
                self.advance()
                return Call(left, tuple(self.parse_arguments()), line=tok.line)
            case (TT.OR | TT.AND | TT.EQ | TT.NEQ | TT.LT | TT.GT | TT.LTE | TT.GTE
                  | TT.PLUS | TT.MINUS | TT.STAR | TT.SLASH):
                self.advance()
                right = self.parse_expression(INFIX_PRECEDENCE[tok.type])
                return Binary(left, tok.type, right, line=tok.line)
            case _:
                raise NoInfixContinuation(tok)

    def parse_arguments(self) -> List[Expr]:
        """Arguments after '(' up to and including ')'"""
        args: List[Expr] = []
        if self.match(TT.RPAR):
            return args

        args.append(self.parse_expression())
        while self.match(TT.COMMA):
            args.append(self.parse_expression())

        self.expect(TT.RPAR, "')' after arguments")
        return args

    def parse_if_expr(self) -> IfExpr:
        """if expr block [else block]"""
        if_tok = self.expect(TT.IF)
        cond = self.parse_expression()
        then_branch = self.parse_block()

        else_branch = None
        if self.match(TT.ELSE):
            else_branch = self.parse_block()

        return IfExpr(cond, then_branch, else_branch, line=if_tok.line)

    # ========================================================================
    # Literals
    # ========================================================================

    def _integer_value(self, tok: Tok) -> int:
        try:
            value = int(tok.lexeme)
        except ValueError:
            raise MalformedNumericLiteral(tok) from None

        if value > INT_MAX:
            raise MalformedNumericLiteral(tok)
        return value

    def _float_value(self, tok: Tok) -> float:
        try:
            value = float(tok.lexeme)
        except ValueError:
            raise MalformedNumericLiteral(tok) from None

        if not math.isfinite(value):
            raise MalformedNumericLiteral(tok)
        return value


def parse_tokens(tokens: List[Tok]) -> Program:
    return Parser(tokens).parse()

def parse_source(source: str) -> Program:
    """Tokenize and parse source text"""
    return Parser(tokenize(source)).parse()
