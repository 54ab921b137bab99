"""Error hierarchy shared by the generation client, features and API."""


class ClinicAssistError(Exception):
    """Base class for all application errors."""


class ConfigurationError(ClinicAssistError):
    """Raised when required configuration (the model API key) is missing."""


class GenerationError(ClinicAssistError):
    """Raised when a call to the remote model does not produce a usable result."""


class RemoteError(GenerationError):
    """Transport or model failure during a chat turn or form generation."""


class ParseError(GenerationError):
    """The model response did not match the declared form shape."""


class ValidationError(ClinicAssistError):
    """Locally detected invalid input, e.g. an oversized upload."""
