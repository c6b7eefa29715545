class ExchangeRateException(Exception):
    pass


class NetworkError(ExchangeRateException):
    pass


class ParseError(ExchangeRateException):
    pass


class UnsupportedOperationError(ExchangeRateException):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Unsupported operation: {operation}")
