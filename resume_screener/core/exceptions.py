"""Exception hierarchy for screening and comparison"""


class ScreeningError(Exception):
    """Base class for every failure reported to callers"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(ScreeningError):
    """A caller precondition was not met (missing input, bad shortlist size, bad file)"""
    pass


class FileReadError(ScreeningError):
    """A document could not be read or encoded"""

    def __init__(self, message: str, input_label: str = ""):
        super().__init__(message)
        self.input_label = input_label


class GenerationFailedError(ScreeningError):
    """The generation service call failed or returned unusable output"""
    pass


class ContractViolationError(GenerationFailedError):
    """The service response did not match the declared output schema"""
    pass


class UnsupportedFileTypeError(InputValidationError):
    """A document is neither PDF nor plain text"""
    pass
