from annostore.data.response.base_response import InvalidResponse, ValidResponse


class PageResponse(ValidResponse):
    def __init__(self, page):
        self.page = page

    def __repr__(self):
        return f"<PageResponse page={self.page!r}>"


class PageFailure(InvalidResponse):
    """A page operation that did not complete.

    `page` is the last known good page (or an unpersisted stub when nothing
    is known). `partially_applied` is set when the annotation document was
    written to the store but the page could not be persisted after it.
    """

    def __init__(self, page, kind, message=None, errors=None, partially_applied=False):
        super().__init__(kind, message)
        self.page = page
        self.errors = errors or []
        self.partially_applied = partially_applied
