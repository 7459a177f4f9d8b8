"""Recursive descent parser for Jack.

Grammar (nand2tetris):
    class           = "class" NAME "{" (classVarDec | subroutineDec)* "}"
    classVarDec     = ("static" | "field") type NAME ("," NAME)* ";"
    type            = "int" | "char" | "boolean" | NAME
    subroutineDec   = ("constructor" | "function" | "method") ("void" | type) NAME
                      "(" parameterList ")" subroutineBody
    parameterList   = (type NAME ("," type NAME)*)?
    subroutineBody  = "{" varDec* statements "}"
    varDec          = "var" type NAME ("," NAME)* ";"
    statements      = (let | if | while | do | return)*
    letStatement    = "let" NAME ("[" expression "]")? "=" expression ";"
    ifStatement     = "if" "(" expression ")" "{" statements "}" ("else" "{" statements "}")?
    whileStatement  = "while" "(" expression ")" "{" statements "}"
    doStatement     = "do" call ";"
    returnStatement = "return" expression? ";"
    expression      = term (op term)*
    term            = INT | STRING | "true" | "false" | "null" | "this"
                    | NAME | NAME "[" expression "]" | call
                    | "(" expression ")" | ("-" | "~") term
    call            = NAME "(" expressionList ")" | NAME "." NAME "(" expressionList ")"
    expressionList  = (expression ("," expression)*)?
    op              = "+" | "-" | "*" | "/" | "&" | "|" | "<" | ">" | "="

Every production method starts with the next unconsumed token being its
first token and returns with the cursor just past its last token. Choices
are made by peeking, so the parser never rewinds the tokenizer.
"""

import logging
from pathlib import Path

from .errors import NestingTooDeepError, ParseError
from .tokenizer import Token, Tokenizer, TokenKind
from .tree import Node

logger = logging.getLogger(__name__)

BINARY_OPS = ("+", "-", "*", "/", "&", "|", "<", ">", "=")

# Jack has a single precedence level: operators apply left to right
FLAT_PRECEDENCE = dict.fromkeys(BINARY_OPS, 1)

# Opt-in conventional precedence; tighter-binding runs are grouped into
# a term holding a nested expression.
ARITHMETIC_PRECEDENCE = {
    "*": 4,
    "/": 4,
    "+": 3,
    "-": 3,
    "<": 2,
    ">": 2,
    "=": 2,
    "&": 1,
    "|": 1,
}


def _alternatives(options: tuple[str, ...]) -> str:
    quoted = [f"'{o}'" for o in options]
    if len(quoted) == 1:
        return quoted[0]
    return ", ".join(quoted[:-1]) + " or " + quoted[-1]


class Parser:
    """Recursive descent parser producing a ``Node`` tree."""

    CLASS_VAR_KEYWORDS = ("static", "field")
    SUBROUTINE_KEYWORDS = ("constructor", "function", "method")
    BUILTIN_TYPES = ("int", "char", "boolean")
    KEYWORD_CONSTANTS = ("true", "false", "null", "this")
    UNARY_OPS = ("-", "~")

    def __init__(self, tokenizer: Tokenizer, precedence: dict[str, int] | None = None):
        self.tokenizer = tokenizer
        self.precedence = FLAT_PRECEDENCE if precedence is None else precedence

        missing = set(BINARY_OPS) - set(self.precedence)
        if missing:
            raise ValueError(f"precedence table has no level for {sorted(missing)}")
        self._levels = sorted(set(self.precedence.values()))

        self.statement_parsers = {
            "let": self.parse_let,
            "if": self.parse_if,
            "while": self.parse_while,
            "do": self.parse_do,
            "return": self.parse_return,
        }

    # -- token helpers -------------------------------------------------

    def peek(self) -> Token | None:
        return self.tokenizer.peek()

    def at_keyword(self, *words: str) -> bool:
        tok = self.peek()
        return tok is not None and tok.is_keyword(*words)

    def at_symbol(self, *chars: str) -> bool:
        tok = self.peek()
        return tok is not None and tok.is_symbol(*chars)

    def at_kind(self, kind: TokenKind) -> bool:
        tok = self.peek()
        return tok is not None and tok.kind is kind

    def error(self, expected: str) -> ParseError:
        tok = self.peek()
        where = tok if tok is not None else self.tokenizer.last
        line, col = (where.line, where.col) if where else (1, 1)
        return ParseError(expected, tok, line, col)

    def expect_keyword(self, node: Node, *words: str) -> Token:
        if not self.at_keyword(*words):
            raise self.error(_alternatives(words))
        return node.add(self.tokenizer.advance())

    def expect_symbol(self, node: Node, *chars: str) -> Token:
        if not self.at_symbol(*chars):
            raise self.error(_alternatives(chars))
        return node.add(self.tokenizer.advance())

    def expect_identifier(self, node: Node) -> Token:
        if not self.at_kind(TokenKind.IDENTIFIER):
            raise self.error(TokenKind.IDENTIFIER.value)
        return node.add(self.tokenizer.advance())

    def expect_type(self, node: Node, allow_void: bool = False) -> Token:
        words = self.BUILTIN_TYPES + (("void",) if allow_void else ())
        if self.at_keyword(*words) or self.at_kind(TokenKind.IDENTIFIER):
            return node.add(self.tokenizer.advance())
        raise self.error(_alternatives(words) + " or class name")

    # -- program structure ---------------------------------------------

    def parse(self) -> Node:
        """Parse one class and require the input to end after it."""
        try:
            tree = self.parse_class()
        except RecursionError:
            tok = self.peek()
            where = tok if tok is not None else self.tokenizer.last
            raise NestingTooDeepError(where.line, where.col) from None
        if self.tokenizer.has_more():
            raise self.error("end of input")
        logger.debug("parsed class with %d nodes", tree.count_nodes())
        return tree

    def parse_class(self) -> Node:
        node = Node(label="class")
        self.expect_keyword(node, "class")
        self.expect_identifier(node)
        self.expect_symbol(node, "{")

        while not self.at_symbol("}"):
            if self.at_keyword(*self.CLASS_VAR_KEYWORDS):
                node.add(self.parse_class_var_dec())
            elif self.at_keyword(*self.SUBROUTINE_KEYWORDS):
                node.add(self.parse_subroutine_dec())
            else:
                raise self.error(
                    _alternatives(self.CLASS_VAR_KEYWORDS + self.SUBROUTINE_KEYWORDS + ("}",))
                )

        self.expect_symbol(node, "}")
        return node

    def parse_class_var_dec(self) -> Node:
        node = Node(label="classVarDec")
        self.expect_keyword(node, *self.CLASS_VAR_KEYWORDS)
        self._parse_typed_names(node)
        return node

    def parse_subroutine_dec(self) -> Node:
        node = Node(label="subroutineDec")
        self.expect_keyword(node, *self.SUBROUTINE_KEYWORDS)
        self.expect_type(node, allow_void=True)
        self.expect_identifier(node)
        self.expect_symbol(node, "(")
        node.add(self.parse_parameter_list())
        self.expect_symbol(node, ")")
        node.add(self.parse_subroutine_body())
        return node

    def parse_parameter_list(self) -> Node:
        """Parse parameters up to, but not including, the closing ')'."""
        node = Node(label="parameterList")
        if self.at_symbol(")"):
            return node

        self.expect_type(node)
        self.expect_identifier(node)
        while self.at_symbol(","):
            node.add(self.tokenizer.advance())
            self.expect_type(node)
            self.expect_identifier(node)
        return node

    def parse_subroutine_body(self) -> Node:
        node = Node(label="subroutineBody")
        self.expect_symbol(node, "{")
        while self.at_keyword("var"):
            node.add(self.parse_var_dec())
        node.add(self.parse_statements())
        self.expect_symbol(node, "}")
        return node

    def parse_var_dec(self) -> Node:
        node = Node(label="varDec")
        self.expect_keyword(node, "var")
        self._parse_typed_names(node)
        return node

    def _parse_typed_names(self, node: Node) -> None:
        """type NAME ("," NAME)* ";" shared by field and local declarations."""
        self.expect_type(node)
        self.expect_identifier(node)
        while self.at_symbol(","):
            node.add(self.tokenizer.advance())
            self.expect_identifier(node)
        self.expect_symbol(node, ";")

    # -- statements ----------------------------------------------------

    def parse_statements(self) -> Node:
        """Parse statements until a token that cannot start one."""
        node = Node(label="statements")
        while True:
            tok = self.peek()
            if tok is None or tok.kind is not TokenKind.KEYWORD:
                break
            parse_statement = self.statement_parsers.get(tok.value)
            if parse_statement is None:
                break
            node.add(parse_statement())
        return node

    def parse_let(self) -> Node:
        node = Node(label="letStatement")
        self.expect_keyword(node, "let")
        self.expect_identifier(node)
        if self.at_symbol("["):
            node.add(self.tokenizer.advance())
            node.add(self.parse_expression())
            self.expect_symbol(node, "]")
        self.expect_symbol(node, "=")
        node.add(self.parse_expression())
        self.expect_symbol(node, ";")
        return node

    def parse_if(self) -> Node:
        node = Node(label="ifStatement")
        self.expect_keyword(node, "if")
        self._parse_condition(node)
        self._parse_block(node)
        if self.at_keyword("else"):
            node.add(self.tokenizer.advance())
            self._parse_block(node)
        return node

    def parse_while(self) -> Node:
        node = Node(label="whileStatement")
        self.expect_keyword(node, "while")
        self._parse_condition(node)
        self._parse_block(node)
        return node

    def parse_do(self) -> Node:
        node = Node(label="doStatement")
        self.expect_keyword(node, "do")
        self.expect_identifier(node)
        if not self.at_symbol("(", "."):
            raise self.error(_alternatives(("(", ".")))
        self._parse_call_rest(node)
        self.expect_symbol(node, ";")
        return node

    def parse_return(self) -> Node:
        node = Node(label="returnStatement")
        self.expect_keyword(node, "return")
        if not self.at_symbol(";"):
            node.add(self.parse_expression())
        self.expect_symbol(node, ";")
        return node

    def _parse_condition(self, node: Node) -> None:
        self.expect_symbol(node, "(")
        node.add(self.parse_expression())
        self.expect_symbol(node, ")")

    def _parse_block(self, node: Node) -> None:
        self.expect_symbol(node, "{")
        node.add(self.parse_statements())
        self.expect_symbol(node, "}")

    # -- expressions ---------------------------------------------------

    def parse_expression(self) -> Node:
        items = self._parse_chain(0)
        # A lone grouped operand is the whole expression; drop the wrapper
        while len(items) == 1 and self._is_group(items[0]):
            items = items[0].children[0].children
        return Node(label="expression", children=items)

    def _parse_chain(self, level: int) -> list:
        """operand (op operand)* for operators at precedence ``self._levels[level]``."""
        items = [self._parse_operand(level + 1)]
        while self._at_binary_op(self._levels[level]):
            items.append(self.tokenizer.advance())
            items.append(self._parse_operand(level + 1))
        return items

    def _parse_operand(self, level: int) -> Node:
        if level == len(self._levels):
            return self.parse_term()
        items = self._parse_chain(level)
        if len(items) == 1:
            return items[0]
        return Node(label="term", children=[Node(label="expression", children=items)])

    def _at_binary_op(self, precedence: int) -> bool:
        tok = self.peek()
        return (
            tok is not None
            and tok.kind is TokenKind.SYMBOL
            and self.precedence.get(tok.value) == precedence
        )

    @staticmethod
    def _is_group(node) -> bool:
        return (
            isinstance(node, Node)
            and node.label == "term"
            and len(node.children) == 1
            and isinstance(node.children[0], Node)
            and node.children[0].label == "expression"
        )

    def parse_term(self) -> Node:
        node = Node(label="term")
        tok = self.peek()

        if tok is None:
            raise self.error(self._term_alternatives())

        if tok.kind in (TokenKind.INT_CONST, TokenKind.STRING_CONST):
            node.add(self.tokenizer.advance())
        elif tok.is_keyword(*self.KEYWORD_CONSTANTS):
            node.add(self.tokenizer.advance())
        elif tok.kind is TokenKind.IDENTIFIER:
            node.add(self.tokenizer.advance())
            # One token of lookahead picks variable, array access or call
            if self.at_symbol("["):
                node.add(self.tokenizer.advance())
                node.add(self.parse_expression())
                self.expect_symbol(node, "]")
            elif self.at_symbol("(", "."):
                self._parse_call_rest(node)
        elif tok.is_symbol("("):
            node.add(self.tokenizer.advance())
            node.add(self.parse_expression())
            self.expect_symbol(node, ")")
        elif tok.is_symbol(*self.UNARY_OPS):
            node.add(self.tokenizer.advance())
            node.add(self.parse_term())
        else:
            raise self.error(self._term_alternatives())

        return node

    def _term_alternatives(self) -> str:
        return "integerConstant, stringConstant, identifier, " + _alternatives(
            self.KEYWORD_CONSTANTS + ("(",) + self.UNARY_OPS
        )

    def _parse_call_rest(self, node: Node) -> None:
        """Finish a call whose leading name is already in ``node``."""
        if self.at_symbol("."):
            node.add(self.tokenizer.advance())
            self.expect_identifier(node)
        self.expect_symbol(node, "(")
        node.add(self.parse_expression_list())
        self.expect_symbol(node, ")")

    def parse_expression_list(self) -> Node:
        """Parse arguments up to, but not including, the closing ')'."""
        node = Node(label="expressionList")
        if self.at_symbol(")"):
            return node

        node.add(self.parse_expression())
        while self.at_symbol(","):
            node.add(self.tokenizer.advance())
            node.add(self.parse_expression())
        return node


def parse(source: str, precedence: dict[str, int] | None = None) -> Node:
    """Parse Jack source code into a parse tree."""
    tokenizer = Tokenizer.from_source(source)
    return Parser(tokenizer, precedence).parse()


def parse_file(filepath: str | Path, precedence: dict[str, int] | None = None) -> Node:
    """Parse a .jack file."""
    filepath = Path(filepath)
    source = filepath.read_text(encoding="utf-8")
    logger.debug("parsing %s", filepath)
    return parse(source, precedence)
