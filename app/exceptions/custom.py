class AppError(Exception):
    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        is_operational: bool = True,
        details: dict | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.is_operational = is_operational
        self.details = details
        super().__init__(message)


class SupabaseError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(Exception):
    def __init__(self, message: str, code: str = "INVALID_TOKEN"):
        self.message = message
        self.code = code
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Rate limit exceeded for {service}")
