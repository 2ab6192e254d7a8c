"""Business-rule errors raised by the lending core."""


class LibraryValidationError(Exception):
    """Raised when an operation would break a lending rule.

    These are expected conditions; the caller should report them and carry on.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ItemNotFoundError(LibraryValidationError):
    """Exception raised when a media id is not registered."""
    def __init__(self, media_id: str, message: str = "Item not found."):
        self.media_id = media_id
        super().__init__(message)


class MemberNotFoundError(LibraryValidationError):
    """Exception raised when a member id is not registered."""
    def __init__(self, member_id: str, message: str = "Member not found."):
        self.member_id = member_id
        super().__init__(message)


class ReservationNotFoundError(LibraryValidationError):
    """Exception raised when a reservation id is unknown."""
    def __init__(self, reservation_id: str, message: str = "Reservation not found."):
        self.reservation_id = reservation_id
        super().__init__(message)
