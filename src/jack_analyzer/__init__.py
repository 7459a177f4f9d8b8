"""Jack syntax analyzer: tokenize and parse Jack classes into XML parse trees.

Pipeline: .jack source -> tokens -> parse tree -> XML document.

Example:
    from jack_analyzer import parse, to_xml

    tree = parse(open("Main.jack").read())
    print(to_xml(tree))
"""

__version__ = "0.1.0"

from .emitter import render_token, to_xml, tokens_to_xml
from .errors import (
    EndOfInputError,
    IntegerOverflowError,
    JackError,
    LexicalError,
    NestingTooDeepError,
    NoPriorTokenError,
    ParseError,
    TokenizerError,
    WrongTokenKindError,
)
from .parser import ARITHMETIC_PRECEDENCE, FLAT_PRECEDENCE, Parser, parse, parse_file
from .tokenizer import KEYWORDS, SYMBOLS, Lexer, Token, Tokenizer, TokenKind, tokenize
from .tree import Node

__all__ = [
    # Tokenize
    "tokenize",
    "Lexer",
    "Tokenizer",
    "Token",
    "TokenKind",
    "KEYWORDS",
    "SYMBOLS",
    # Parse
    "parse",
    "parse_file",
    "Parser",
    "Node",
    "FLAT_PRECEDENCE",
    "ARITHMETIC_PRECEDENCE",
    # Emit
    "to_xml",
    "tokens_to_xml",
    "render_token",
    # Errors
    "JackError",
    "LexicalError",
    "NestingTooDeepError",
    "IntegerOverflowError",
    "ParseError",
    "TokenizerError",
    "EndOfInputError",
    "NoPriorTokenError",
    "WrongTokenKindError",
]
