"""
Exceptions
----------

Every failure a use case can report. Each carries a user-facing ``message``.

- :class:`AuthenticationError` is resolved at the session gate and never reaches
  business logic.
- :class:`AuthorizationError`, :class:`EntitlementError` and :class:`StateConflictError`
  are local and deterministic; they are handed straight back to the caller.
- :class:`UpstreamError` means the remote queue service failed. When it is raised the
  operation did not happen locally either.
"""


class RideGateError(Exception):

    def __init__(self, message: str = None):
        if message is None:
            message = self.default_message
        super().__init__(message)
        self.message = message

    default_message = "Something went wrong."


class AuthenticationError(RideGateError):
    default_message = "Authentication failed."


class TokenMissingError(AuthenticationError):
    default_message = "Token not found."


class TokenExpiredError(AuthenticationError):
    default_message = "Token has expired."


class TokenInvalidError(AuthenticationError):
    default_message = "Invalid token."


class AuthorizationError(RideGateError):
    default_message = "You do not have access to that resource."


class NotOwnerError(AuthorizationError):
    default_message = "You may only act on your own queue."


class EntitlementError(RideGateError):
    default_message = "Your ticket does not allow that."


class NoActiveTicketTodayError(EntitlementError):
    default_message = "You have no active ticket for today. Please buy a ticket first."


class TicketTypeMismatchError(EntitlementError):

    def __init__(self, actual, requested):
        super().__init__(
            f"Your ticket type ({actual.value}) does not match the requested ticket type ({requested.value})."
        )
        self.actual = actual
        self.requested = requested


class EntitlementDataMissingError(EntitlementError):
    """The ticket order points at a slot or product that no longer exists."""
    default_message = "The ticket data for this order is incomplete."


class StateConflictError(RideGateError):
    default_message = "That conflicts with the current state of your reservation."


class AlreadyWaitingOrCompletedError(StateConflictError):
    default_message = "You are already waiting for, or have already ridden, this ride. Each ticket may be used once per ride."


class NoWaitingReservationError(StateConflictError):
    default_message = "You have no waiting reservation for this ride."


class InvalidTransitionError(StateConflictError):

    def __init__(self, current, target):
        super().__init__(f"A {current.value} reservation cannot become {getattr(target, 'value', target)}.")
        self.current = current
        self.target = target


class UpstreamError(RideGateError):
    default_message = "The queue server could not handle the request."


class UpstreamTimeoutError(UpstreamError):
    default_message = "The queue server did not respond in time."


class UpstreamUnreachableError(UpstreamError):
    default_message = "The queue server could not be reached."


class UnexpectedUpstreamResponseError(UpstreamError):
    default_message = "The queue server sent an unexpected response."
