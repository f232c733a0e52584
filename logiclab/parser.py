"""
Recursive descent parser building an AST from a token stream.

Grammar, loosest to tightest binding:

    expression := xor_expr ((OR | NOR) xor_expr)*
    xor_expr   := and_expr ((XOR | XNOR) and_expr)*
    and_expr   := unary ((AND | NAND)? unary)*
    unary      := NOT* primary "'"*
    primary    := VARIABLE | LITERAL | "(" expression ")"

All binary operators are left-associative. A missing operator between two
AND-tier operands is an implicit AND, so ``A B`` means ``A AND B``.
Parentheses may nest at most ``MAX_NESTING_DEPTH`` levels.
"""

import itertools
from dataclasses import dataclass

from .errors import ExpressionSyntaxError
from .lexer import Token, TokenType, tokenize
from .nodes import BinaryKind, BinaryOp, Literal, Node, Not, Variable


# Deepest parenthesis nesting accepted by the recursive descent
MAX_NESTING_DEPTH = 100


@dataclass(frozen=True)
class ParseResult:
    ast: Node
    variables: list[str]


_BINARY_KINDS = {
    TokenType.AND: BinaryKind.AND,
    TokenType.OR: BinaryKind.OR,
    TokenType.XOR: BinaryKind.XOR,
    TokenType.NAND: BinaryKind.NAND,
    TokenType.NOR: BinaryKind.NOR,
    TokenType.XNOR: BinaryKind.XNOR,
}

# Tokens that can begin a unary expression (and so trigger implicit AND)
_UNARY_START = frozenset({
    TokenType.VARIABLE,
    TokenType.LITERAL,
    TokenType.LPAREN,
    TokenType.NOT,
})


class Parser:
    """
    Single-use parser over one token list.

    Node ids come from a counter local to the instance, so concurrent
    parses never share numbering state.
    """

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind is not TokenType.EOF:
            end = tokens[-1].position + tokens[-1].length if tokens else 0
            tokens = list(tokens) + [Token(TokenType.EOF, "", end, 0)]
        self.tokens = tokens
        self.current = 0
        self.variables: set[str] = set()
        self.depth = 0
        self._ids = itertools.count(1)

    def parse(self) -> ParseResult:
        """
        Parse the whole token stream.

        Raises:
            ExpressionSyntaxError: empty input, unexpected or trailing tokens,
                an unclosed parenthesis, or nesting beyond MAX_NESTING_DEPTH
        """
        if self.peek().kind is TokenType.EOF:
            raise ExpressionSyntaxError("Expression cannot be empty", 0, 0)

        ast = self._expression()

        if not self.is_at_end():
            token = self.peek()
            raise ExpressionSyntaxError(
                f"Unexpected token: {token.text}", token.position, token.length
            )

        return ParseResult(ast=ast, variables=sorted(self.variables))

    def _expression(self) -> Node:
        left = self._xor_expression()
        while self.match(TokenType.OR, TokenType.NOR):
            operator = self.previous()
            right = self._xor_expression()
            left = self._binary(operator.kind, left, right)
        return left

    def _xor_expression(self) -> Node:
        left = self._and_expression()
        while self.match(TokenType.XOR, TokenType.XNOR):
            operator = self.previous()
            right = self._and_expression()
            left = self._binary(operator.kind, left, right)
        return left

    def _and_expression(self) -> Node:
        left = self._unary()
        while True:
            if self.match(TokenType.AND, TokenType.NAND):
                operator = self.previous()
                right = self._unary()
                left = self._binary(operator.kind, left, right)
            elif self.peek().kind in _UNARY_START:
                right = self._unary()
                left = self._binary(TokenType.AND, left, right)
            else:
                return left

    def _unary(self) -> Node:
        prefix = 0
        while self.match(TokenType.NOT):
            prefix += 1

        node = self._primary()
        while self.peek().is_postfix_not:
            self.advance()
            node = Not(node, node_id=next(self._ids))
        for _ in range(prefix):
            node = Not(node, node_id=next(self._ids))
        return node

    def _primary(self) -> Node:
        if self.match(TokenType.LITERAL):
            return Literal(self.previous().text == "1", node_id=next(self._ids))

        if self.match(TokenType.VARIABLE):
            name = self.previous().text
            self.variables.add(name)
            return Variable(name, node_id=next(self._ids))

        if self.match(TokenType.LPAREN):
            paren = self.previous()
            self.depth += 1
            if self.depth > MAX_NESTING_DEPTH:
                raise ExpressionSyntaxError(
                    "Expression is nested too deeply",
                    paren.position,
                    paren.length,
                    suggestion=f"Use at most {MAX_NESTING_DEPTH} levels of parentheses",
                )
            expr = self._expression()
            self.depth -= 1
            if not self.match(TokenType.RPAREN):
                token = self.peek()
                raise ExpressionSyntaxError(
                    "Missing closing parenthesis",
                    token.position,
                    token.length,
                    suggestion="Add a ) to close the parenthesis",
                )
            return expr

        token = self.peek()
        if token.kind is TokenType.EOF:
            message = "Unexpected end of expression"
        else:
            message = f"Expected variable or value, got: {token.text}"
        raise ExpressionSyntaxError(message, token.position, token.length)

    def _binary(self, kind: TokenType, left: Node, right: Node) -> Node:
        return BinaryOp(_BINARY_KINDS[kind], left, right, node_id=next(self._ids))

    # Token helpers

    def match(self, *kinds: TokenType) -> bool:
        if self.peek().kind in kinds:
            self.advance()
            return True
        return False

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().kind is TokenType.EOF


def parse(tokens: list[Token]) -> ParseResult:
    """Parse a token list into an AST plus its sorted variable names."""
    return Parser(tokens).parse()


def parse_expression(text: str) -> ParseResult:
    """Tokenize and parse an expression string."""
    return parse(tokenize(text))
