"""Exceptions raised while tokenizing and parsing Jack source."""


class JackError(Exception):
    """Base class for every error raised by the analyzer."""


class LexicalError(JackError):
    """Malformed or unterminated token in the source text."""

    def __init__(self, msg: str, line: int, col: int):
        super().__init__(f"line {line}, col {col}: {msg}")
        self.line = line
        self.col = col


class IntegerOverflowError(LexicalError):
    """Integer constant outside the 16-bit range the language allows."""


class ParseError(JackError):
    """Token sequence does not match the grammar at a decision point.

    ``expected`` describes what the grammar allowed (a token kind such as
    ``identifier`` or a list of literal alternatives such as ``'{'``), and
    ``found`` is the offending token, or None at end of input.
    """

    def __init__(self, expected: str, found, line: int, col: int):
        if found is None:
            found_text = "end of input"
        else:
            found_text = f"{found.kind.value} {found.value!r}"
        super().__init__(f"line {line}, col {col}: expected {expected}, found {found_text}")
        self.expected = expected
        self.found = found
        self.line = line
        self.col = col


class NestingTooDeepError(JackError):
    """Constructs nest deeper than the interpreter's call stack allows."""

    def __init__(self, line: int, col: int):
        super().__init__(f"line {line}, col {col}: nesting too deep")
        self.line = line
        self.col = col


class TokenizerError(JackError):
    """The tokenizer was driven incorrectly by its caller."""


class EndOfInputError(TokenizerError):
    pass


class NoPriorTokenError(TokenizerError):
    pass


class WrongTokenKindError(TokenizerError):
    pass
