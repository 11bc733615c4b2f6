class DomainError(Exception):
    pass


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class EmailAlreadyExistsError(ConflictError):
    def __init__(self, message: str = "Email already exists"):
        super().__init__(message)
