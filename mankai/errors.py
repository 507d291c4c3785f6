class MankaiError(Exception):
    """ Base class for all Mankai errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ScanError(MankaiError):
    """ Raised when the source text cannot be split into tokens"""

    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position


class ParseError(MankaiError):
    """ Raised when a token stream is not a well-formed S-expression"""

    def __init__(self, message: str, token=None):
        super().__init__(message)
        self.token = token


class MankaiRuntimeError(MankaiError):
    """ Base class for failures raised while evaluating"""


class UnboundSymbolError(MankaiRuntimeError):
    """ Raised when an identifier is looked up before it is bound"""

    def __init__(self, name: str):
        super().__init__(f"unbound symbol '{name}'")
        self.name = name


class NotCallableError(MankaiRuntimeError):
    """ Raised when a non-callable value is in head position"""

    def __init__(self, rendered: str):
        super().__init__(f"'{rendered}' is not callable")


class ArityError(MankaiRuntimeError):
    """ Raised when the number of arguments passed to a callable is incorrect"""


class ArgumentTypeError(MankaiRuntimeError):
    """ Raised when an argument has the wrong runtime type"""

    def __init__(self, callee: str, position: int, expected: str, message: str | None = None):
        if message is None:
            message = f"argument {position} of '{callee}' is not a {expected}"
        super().__init__(message)
        self.callee = callee
        self.position = position
        self.expected = expected


class ReservedNameError(MankaiRuntimeError):
    """ Raised when a definition form targets a reserved identifier"""

    def __init__(self, form: str, name: str, category: str):
        super().__init__(
            f"can't assign to '{name}' with '{form}' because the name is reserved for a {category}"
        )
        self.name = name
        self.category = category


class DivideByZeroError(MankaiRuntimeError):
    """ Raised when a division operand is zero"""

    def __init__(self, position: int):
        super().__init__(f"divide by zero: argument {position} of '/' is zero")
        self.position = position


class EmptyListError(MankaiRuntimeError):
    """ Raised when car/cdr is applied to an empty list"""

    def __init__(self, callee: str):
        super().__init__(f"'{callee}' can't apply to empty list")
        self.callee = callee


class MalformedFormError(MankaiRuntimeError):
    """ Raised when a special form receives sub-expressions of the wrong shape"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position


class CallDepthError(MankaiRuntimeError):
    """ Raised when user-defined calls nest deeper than the configured limit"""

    def __init__(self, limit: int):
        super().__init__(f"maximum call depth of {limit} exceeded")
        self.limit = limit


class NestingDepthError(MankaiRuntimeError):
    """ Raised when expressions being evaluated nest deeper than the configured limit"""

    def __init__(self, limit: int):
        super().__init__(f"maximum expression nesting depth of {limit} exceeded")
        self.limit = limit


class EnvironmentInvariantError(MankaiError):
    """ Raised when the environment layer stack would lose its global layer.

    Fatal: not a MankaiRuntimeError, front ends must not report it as an
    ordinary evaluation failure.
    """


def render_error(err: MankaiError) -> str:
    """Format an error the way front ends display it, prefixed by origin."""
    if isinstance(err, ScanError):
        return f"Lexing error at {err.position}: {err.message}"
    if isinstance(err, ParseError):
        if err.token is not None:
            return f"Parsing error at '{err.token.lexeme}': {err.message}"
        return f"Parsing error: {err.message}"
    if isinstance(err, MankaiRuntimeError):
        return f"Runtime error: {err.message}"
    return err.message
