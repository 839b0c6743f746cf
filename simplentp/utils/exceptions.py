class SimpleNtpException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class ValidationError(SimpleNtpException):
    pass


class TransportError(SimpleNtpException):
    pass


class ResolutionError(TransportError):
    pass


class QueryTimeoutError(TransportError):
    pass


class ProtocolError(SimpleNtpException):
    pass


class DecodeError(ProtocolError):
    pass
