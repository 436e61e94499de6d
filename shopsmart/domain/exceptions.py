"""Custom exceptions for the shopping list service."""


class ShopSmartError(Exception):
    """Base class for errors surfaced to the caller."""


class ConfigurationError(ShopSmartError):
    """Raised when the persistence layer is missing or misconfigured.

    Terminal for the current request: nothing is aggregated and the stored
    shopping list is left untouched.
    """


class StorageError(ShopSmartError):
    """Raised when a read or an atomic commit against the document store fails."""


class ProfileError(ShopSmartError):
    """Raised for invalid profile operations (e.g. deleting the default profile)."""

    def __init__(self, profile_id: str, message: str):
        """Initialize exception with the offending profile id.

        Args:
            profile_id: Profile the operation targeted
            message: Human readable reason
        """
        self.profile_id = profile_id
        super().__init__(message)


class SuggestionError(ShopSmartError):
    """Raised when the AI suggestion service fails; retryable, never mutates state."""


class ItemNotFoundError(ShopSmartError):
    """Raised when a shopping list item id does not exist."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Shopping item '{item_id}' not found")
