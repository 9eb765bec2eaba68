"""Domain-specific exceptions — framework-independent."""


class BlogKitError(Exception):
    """Base class for every error raised by the blog domain."""


class ValidationError(BlogKitError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class NotFoundError(BlogKitError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ConflictError(BlogKitError):
    """Raised when a write would break a uniqueness rule."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field} '{value}' already exists")


class AuthenticationError(BlogKitError):
    """Raised when credentials are missing or invalid."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class AuthorizationError(BlogKitError):
    """Raised when the caller lacks the required role."""

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)
