class ErrorKind:
    TRANSPORT_FAILURE = "transport_failure"
    TRANSPORT_TIMEOUT = "transport_timeout"
    NOT_PERSISTED = "not_persisted"
    ITEM_NOT_FOUND = "item_not_found"
    INVALID_REQUEST = "invalid_request"
    PAGE_UNAVAILABLE = "page_unavailable"


class Response:
    pass


class InvalidResponse(Response):
    def __init__(self, kind, message=None):
        self.kind = kind
        self.message = message

    def __bool__(self):
        return False

    def __repr__(self):
        return f"<{type(self).__name__} kind={self.kind} message={self.message!r}>"


class ValidResponse(Response):
    def __bool__(self):
        return True
