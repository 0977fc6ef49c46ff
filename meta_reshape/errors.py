"""Exception and warning types raised while reshaping."""

__all__ = [
    "ShapeError",
    "ConfigurationError",
    "MissingColumnError",
    "MissingColumnWarning",
]


class ShapeError(ValueError):
    """Raised when dimensions, triangle counts, or label sets disagree."""
    pass


class ConfigurationError(ValueError):
    """Raised when an argument combination cannot be reshaped."""
    pass


class MissingColumnError(ShapeError):
    """Raised when a design references columns absent from ``data``."""

    def __init__(self, message, columns=()):
        super().__init__(message)
        self.columns = list(columns)


class MissingColumnWarning(UserWarning):
    """Design references columns absent from ``data``; cells were dropped."""
    pass
