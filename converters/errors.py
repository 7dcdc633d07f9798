"""Exceptions raised by the converter framework."""


class ConverterError(Exception):
    """Base class for every error raised by the converters package."""


class ConfigurationError(ConverterError):
    """A required option is missing or an option has an invalid value."""


class RepositoryNotEmptyError(ConverterError):
    """The target repository holds data and neither clean nor append was set."""

    def __init__(self, size):
        super().__init__(
            f"repository is not empty (size = {size}). Use --clean to clear "
            f"repository before import, or use --append to ignore this setting."
        )
        self.size = size


class RepositoryError(ConverterError):
    """A request against the remote repository failed."""


class SinkFinalizedError(ConverterError):
    """The sink was used after its finalize step already ran."""
