"""Excepciones de dominio para el motor de bookings."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    status_code = 500

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Validación ===


class ValidationError(DomainError):
    """Datos de entrada inválidos o incompletos."""

    status_code = 400

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message=message, code="VALIDATION_ERROR")
        self.fields = fields or []


class MissingFieldsError(ValidationError):
    """Faltan campos requeridos para crear un booking."""

    def __init__(self, fields: list[str]):
        super().__init__(
            message=f"Missing required fields: {', '.join(fields)}",
            fields=fields,
        )


class InvalidStatusError(ValidationError):
    """El estado destino no pertenece al vocabulario permitido."""

    def __init__(self, status: str, allowed: tuple[str, ...]):
        super().__init__(
            message=f"Invalid status. Must be one of: {', '.join(allowed)}",
            fields=["status"],
        )
        self.status = status
        self.allowed = allowed


# === Autorización ===


class AuthorizationError(DomainError):
    """El actor no es dueño del recurso ni tiene un rol habilitado."""

    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message=message, code="ACCESS_DENIED")


class AuthenticationError(DomainError):
    """No se pudo identificar al usuario que realiza la petición."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message, code="AUTHENTICATION_REQUIRED")


# === No encontrado ===


class NotFoundError(DomainError):
    status_code = 404

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code)


class BookingNotFoundError(NotFoundError):
    """Ni el booking ni el custom trip existen."""

    def __init__(self, booking_id: str):
        super().__init__(message="Booking not found", code="BOOKING_NOT_FOUND")
        self.booking_id = booking_id


class TourNotFoundError(NotFoundError):
    def __init__(self, tour_id: str):
        super().__init__(message="Tour not found", code="TOUR_NOT_FOUND")
        self.tour_id = tour_id


class GuideNotFoundError(NotFoundError):
    def __init__(self, guide_id: str):
        super().__init__(message="Guide not found", code="GUIDE_NOT_FOUND")
        self.guide_id = guide_id


class CustomTripNotFoundError(NotFoundError):
    def __init__(self, trip_id: str):
        super().__init__(message="Custom trip not found", code="CUSTOM_TRIP_NOT_FOUND")
        self.trip_id = trip_id


# === Transiciones ===


class TransitionError(DomainError):
    """El estado actual no permite la transición solicitada."""

    status_code = 400

    def __init__(self, message: str, current_status: str, operation: str):
        super().__init__(message=message, code="INVALID_TRANSITION")
        self.current_status = current_status
        self.operation = operation


class ConcurrentModificationError(DomainError):
    """Otro request modificó el registro entre la lectura y la escritura."""

    status_code = 409

    def __init__(self, record_id: str, expected_version: int):
        super().__init__(
            message=f"Record {record_id} was modified concurrently, please retry",
            code="CONCURRENT_MODIFICATION",
        )
        self.record_id = record_id
        self.expected_version = expected_version


# === Dependencias externas ===


class DependencyFailure(DomainError):
    """Falló un colaborador externo (render de documentos, mensajería)."""

    status_code = 500

    def __init__(self, dependency: str, message: str):
        super().__init__(message=message, code="DEPENDENCY_FAILURE")
        self.dependency = dependency
