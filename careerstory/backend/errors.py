class PitchGenerationError(RuntimeError):
    """Base class for every failure of a pitch generation call."""


class EmptyInputError(PitchGenerationError):
    pass


class ConfigurationError(PitchGenerationError):
    pass


class ProviderError(PitchGenerationError):
    pass


class MalformedResponseError(PitchGenerationError):
    pass
