# stockroom/core/errors.py
#
# Every error raised by the service layer carries a message that can be shown
# to the user as-is.


class StockroomError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreNotInitializedError(StockroomError):
    def __init__(self, message: str = "Database not initialized"):
        super().__init__(message)


class InvalidInputError(StockroomError):
    pass


class NotFoundError(StockroomError):
    pass


class InsufficientStockError(StockroomError):
    """Raised when one or more order lines cannot be covered by stock on hand."""

    def __init__(self, shortfalls):
        self.shortfalls = list(shortfalls)
        super().__init__("; ".join(s.message for s in self.shortfalls))
