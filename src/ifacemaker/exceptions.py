# Custom exceptions for ifacemaker

class IfacemakerError(Exception):
    """Base exception for all application-specific errors."""
    pass

class ParserError(IfacemakerError):
    """Raised when a Go source file cannot be parsed."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to parse {file_path}: {message}")

class TypeNotFoundError(IfacemakerError):
    """Raised when the requested struct type is not declared in any input file."""
    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f'"{type_name}" structtype not found in input files')

class FormatError(IfacemakerError):
    """Raised when generated code cannot be formatted (usually a syntax error)."""
    pass

class SourceReadError(IfacemakerError):
    """Raised when an input file cannot be read or an output file cannot be written."""
    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)

class ConfigError(IfacemakerError):
    """Raised for configuration-related problems."""
    pass
