class SquirrelError(Exception):
    """ Base class for all Squirrel errors"""
    pass


class LexError(SquirrelError):
    """ Raised when the source text cannot be split into tokens"""

    def __init__(self, message: str, lexeme: str = "", position: int = -1):
        super().__init__(message)
        self.lexeme = lexeme
        self.position = position


class ParseError(SquirrelError):
    """ Raised when the token stream does not form a single valid expression"""


class UnboundSymbolError(SquirrelError):
    """ Raised when a symbol is used before it is bound"""

    def __init__(self, message: str, name: str = ""):
        super().__init__(message)
        self.name = name


class SquirrelTypeError(SquirrelError):
    """ Raised when a value of the wrong kind appears where a fixed kind is required"""


class ArgumentError(SquirrelError):
    """ Raised when a function receives the wrong number or kind of arguments"""


class FormatError(SquirrelError):
    """ Raised when a string cannot be parsed as a number"""


class DictionaryKeyError(SquirrelError):
    """ Raised when a dictionary literal has a key that is not a string"""


class DictionaryArityError(SquirrelError):
    """ Raised when a dictionary literal has a key without a value"""


class StackExhausted(SquirrelError):
    """ Raised when evaluation nests deeper than the call stack allows"""


class CodegenUnsupportedError(SquirrelError):
    """ Raised when an expression has no JavaScript lowering"""
