class ServiceError(Exception):
    """Base exception for service layer failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class AppointmentNotFoundError(ServiceError):
    """Raised when a caller asks for an appointment id the store does not hold."""

    def __init__(self, appointment_id: str, *, cause: Exception | None = None):
        super().__init__(f"Appointment {appointment_id} not found", cause=cause)
        self.appointment_id = appointment_id
