"""Results of the primitive calls against the remote document store.

Both kinds carry a `document`: the stored document on success, the best
known fallback on failure.
"""
from annostore.data.response.base_response import InvalidResponse, ValidResponse


class StoredDocument(ValidResponse):
    def __init__(self, document=None):
        self.document = document

    def __repr__(self):
        return f"<StoredDocument document={self.document!r}>"


class StoreFailure(InvalidResponse):
    def __init__(self, kind, document=None, message=None):
        super().__init__(kind, message)
        self.document = document
