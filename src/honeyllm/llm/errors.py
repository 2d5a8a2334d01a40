class LLMError(RuntimeError):
    pass


class UnsupportedProviderError(LLMError):
    """Raised for a provider value outside the supported set."""


class ProviderInitializationError(LLMError):
    """Raised when a provider client cannot be set up from its config."""


class PromptTemplateError(LLMError):
    """Raised when the user prompt template cannot take the serialized request."""


class RequestSerializationError(LLMError):
    """Raised when a captured HTTP request cannot be rendered to wire text."""


class ContentGenerationError(LLMError):
    """Raised when the backend call itself fails."""


class GenerationCancelledError(ContentGenerationError):
    """Raised when the caller cancels an in-flight generation."""


class GenerationTimeoutError(GenerationCancelledError):
    """Raised when a generation outlives its deadline."""


class EmptyLLMResponseError(LLMError):
    """Base for a backend answer with nothing usable in it."""


class NilResponseError(EmptyLLMResponseError):
    def __init__(self, message: str = "empty LLM response: response is None"):
        super().__init__(message)


class NoChoicesError(EmptyLLMResponseError):
    def __init__(self, message: str = "empty LLM response: no choices available"):
        super().__init__(message)


class EmptyContentError(EmptyLLMResponseError):
    def __init__(
        self, message: str = "empty LLM response: content of first choice is empty"
    ):
        super().__init__(message)


class LLMValidationError(LLMError):
    """Raised when the model output cannot be validated against the requested schema.

    ``cleaned`` holds the text that failed, so callers can log it.
    """

    def __init__(self, message: str, *, cleaned: str = ""):
        super().__init__(message)
        self.cleaned = cleaned


class MalformedJSONError(LLMValidationError):
    """The cleaned text is not syntactically valid JSON."""


class InvalidJSONResponseError(LLMValidationError):
    """The cleaned text is valid JSON but misses required fields."""
