"""Failure taxonomy surfaced at the service boundaries."""


class RoutingDegraded(Exception):
    """Reserved. Agent routing always resolves to the default agent instead."""


class ProviderError(Exception):
    """A single completion provider failed or returned unusable content."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class CompletionUnavailable(Exception):
    """Every completion provider failed for this request."""


class SynthesisUnavailable(Exception):
    """The voice origin failed or the speech deadline passed."""


class PersistenceFailed(Exception):
    """A durable write exhausted its retries. Only ever logged."""


class PaymentFailed(Exception):
    """Checkout creation was rejected by the payment gateway or never reached it."""
