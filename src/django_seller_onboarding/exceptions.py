class StepNotFound(KeyError):
    """Raised when a step id is not in the step registry."""

    default_message = "No onboarding step is registered for '%s'."

    def __init__(self, step_id: str, message: str | None = None) -> None:
        self.step_id = str(step_id)
        self.message = message or self.default_message
        super().__init__(self.message % self.step_id)

    def __str__(self) -> str:
        return self.message % self.step_id

    def __repr__(self) -> str:
        return self.message % self.step_id


class SellerTypeNotFound(KeyError):
    """Raised by strict registry lookups when a seller type is not registered."""

    default_message = "No seller type is registered for '%s'."

    def __init__(self, seller_type: str, message: str | None = None) -> None:
        self.seller_type = str(seller_type)
        self.message = message or self.default_message
        super().__init__(self.message % self.seller_type)

    def __str__(self) -> str:
        return self.message % self.seller_type

    def __repr__(self) -> str:
        return self.message % self.seller_type


class OnboardingStoreError(RuntimeError):
    """Raised when the persistence layer cannot read or write onboarding state."""
