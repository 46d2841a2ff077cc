"""Error types raised by the retention insights pipeline."""


class RetentionInsightsError(Exception):
    """Base class for all retention insights errors."""

    pass


class InvalidInputError(RetentionInsightsError, ValueError):
    """Input data violates a pipeline precondition.

    Raised for empty retention curves, timestamps that are not strictly
    increasing, mismatched video ids, or a moment that does not qualify
    as a hotspot.
    """

    pass


class LLMProviderError(RetentionInsightsError):
    """Error from the text-generation service.

    Covers transport failures, empty responses and responses that are
    not a JSON object. The explainer and aggregator recover from it by
    falling back to deterministic content.
    """

    pass
