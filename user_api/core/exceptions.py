class AppError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UserValidationError(AppError):
    """Malformed or out-of-policy input on create/edit."""


class MissingFieldError(UserValidationError):
    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"{field} is required")
        self.field = field


class InvalidEmailFormatError(UserValidationError):
    def __init__(self):
        super().__init__("Invalid email format")


class InvalidNameFormatError(UserValidationError):
    def __init__(self):
        super().__init__("Full name should contain only letters and spaces")


class NameLengthOutOfRangeError(UserValidationError):
    def __init__(self, min_length: int, max_length: int):
        super().__init__(f"Full name must be between {min_length} and {max_length} characters")


class WeakPasswordError(UserValidationError):
    def __init__(self):
        super().__init__(
            "Password must be at least 8 characters long, contain at least one uppercase letter, "
            "one lowercase letter, one number, and one special character."
        )


class DuplicateEmailError(AppError):
    def __init__(self, email: str):
        super().__init__("Email already exists")
        self.email = email


class NotFoundError(AppError):
    def __init__(self, entity: str, id: str | None = None):
        message = f"{entity} not found: {id}" if id else f"{entity} not found"
        super().__init__(message, status_code=404)


class UnsupportedMediaTypeError(AppError):
    def __init__(self, content_type: str | None):
        super().__init__("Invalid file type. Only JPEG, PNG, and GIF formats are allowed.")
        self.content_type = content_type


class MissingFileError(AppError):
    def __init__(self):
        super().__init__("No file uploaded or invalid file type")


class StoreError(AppError):
    def __init__(self, message: str = "A storage error occurred"):
        super().__init__(message, status_code=500)
