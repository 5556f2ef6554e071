"""Custom exceptions for diffjson."""


class JsonDiffError(Exception):
    """Base exception for diffjson errors."""
    pass


class PatternError(JsonDiffError):
    """Raised when a rule pattern cannot be compiled."""
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid path pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class ParseError(JsonDiffError):
    """Raised when a JSON document is malformed."""
    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message}: line {line} column {column}")
        self.message = message
        self.line = line
        self.column = column


class ProfileError(JsonDiffError):
    """Raised when a profile file cannot be read or has the wrong shape."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid profile '{path}': {reason}")
        self.path = path
        self.reason = reason
