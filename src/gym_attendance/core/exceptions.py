class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass carries the HTTP status the controller layer answers with.
    """

    status_code = 400
    default_message = "Yêu cầu không hợp lệ"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateRangeError(ValidationError):
    default_message = "Khoảng ngày không hợp lệ"


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Không tìm thấy dữ liệu"


class UserNotFoundError(NotFoundError):
    default_message = "Người dùng không tồn tại"


class SubscriptionNotFoundError(NotFoundError):
    default_message = "Không tìm thấy gói đăng ký"


class MembershipNotFoundError(NotFoundError):
    default_message = "Không tìm thấy gói tập"


class ConflictStateError(DomainError):
    """The requested transition is invalid for the current state."""

    status_code = 409
    default_message = "Trạng thái hiện tại không cho phép thao tác này"


class AlreadyInsideError(ConflictStateError):
    default_message = "Hội viên đang ở trong phòng tập"


class NotInsideError(ConflictStateError):
    default_message = "Hội viên chưa check-in"


class SubscriptionAlreadyExistsError(ConflictStateError):
    default_message = "Hội viên đã có gói đăng ký"


class QuotaExhaustedError(DomainError):
    status_code = 403
    default_message = "Đã hết lượt sử dụng"


class NoAvailableAttendancesError(QuotaExhaustedError):
    default_message = "Không còn lượt tập khả dụng trong tháng này"
