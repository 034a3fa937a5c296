"""Exception types raised by the engine and the request store."""


class TechDashError(RuntimeError):
    """Base class for Tech Dash errors."""


class InvalidArgumentError(TechDashError, ValueError):
    """A caller broke a function's contract (e.g. deriving from no tasks)."""


class StoreError(TechDashError):
    """The request store could not complete an operation."""


class RequestNotFoundError(StoreError):
    def __init__(self, request_id: int):
        super().__init__(f"Request {request_id} not found")
        self.request_id = request_id
