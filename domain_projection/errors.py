class ProjectionError(ValueError):
    """Base class for everything raised by domain_projection."""


class InvalidDomainError(ProjectionError):
    """Pixel dimensions, domain spans or geographic bounds cannot define a transform."""


class InvalidViewError(ProjectionError):
    """The geographic bounds of a view collapse to a zero-width or zero-height rectangle."""


class ConfigError(ProjectionError):
    """A projection config is not a mapping, is missing keys, holds non-numbers or cannot be read as JSON."""
