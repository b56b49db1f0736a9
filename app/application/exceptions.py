class SchedulingUpstreamError(RuntimeError):
    """Raised when the scheduling or booking service fails (non-2xx, network errors)."""
    pass


class AvailabilityUnavailableError(SchedulingUpstreamError):
    """Raised when open slots could not be loaded."""
    pass


class BookingRejectedError(SchedulingUpstreamError):
    """Raised when the booking service did not accept the confirmation."""
    pass


class WidgetActionError(RuntimeError):
    """Raised when an action is not allowed in the widget's current state."""
    pass
