"""In-memory versioned document store with RERUM-like history.

Documents are never edited in place: a new version gets a new id, and the
previous version records it under `__rerum.history.next`. The history tip
of a chain is the version whose `next` list is empty.
"""
import copy
import threading
import uuid
from datetime import datetime

_RESERVED_KEYS = ("@id", "id", "__rerum", "__deleted")


class DocumentNotFound(Exception):
    pass


class VersionConflict(Exception):
    pass


class InvalidQuery(ValueError):
    pass


def _now():
    return datetime.utcnow().isoformat()


def _strip_reserved(doc):
    return {k: copy.deepcopy(v) for k, v in doc.items() if k not in _RESERVED_KEYS}


def _lookup(doc, path):
    value = doc
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return None, False
        value = value[key]
    return value, True


def _matches_operators(value, present, operators):
    for op, arg in operators.items():
        if op == "$exists":
            if present != bool(arg):
                return False
        elif op == "$size":
            if not present or not isinstance(value, list) or len(value) != arg:
                return False
        elif op == "$eq":
            if not present or value != arg:
                return False
        else:
            raise InvalidQuery(f"Unsupported query operator {op}")
    return True


def matches(doc, query):
    for key, expected in query.items():
        value, present = _lookup(doc, key)
        if isinstance(expected, dict) and expected and all(
            op.startswith("$") for op in expected
        ):
            if not _matches_operators(value, present, expected):
                return False
        elif not present or value != expected:
            return False
    return True


class DocumentStore:
    def __init__(self, id_prefix=""):
        self.id_prefix = id_prefix
        self._documents = {}
        self._lock = threading.RLock()

    def _new_id(self):
        return f"{self.id_prefix}{uuid.uuid4().hex}"

    def _resolve(self, doc_id):
        if doc_id in self._documents:
            return self._documents[doc_id]
        # Clients may send the full id URL or only its last segment.
        tail = doc_id.rstrip("/").rsplit("/", 1)[-1]
        for stored_id, doc in self._documents.items():
            if stored_id.rsplit("/", 1)[-1] == tail:
                return doc
        raise DocumentNotFound(doc_id)

    def get(self, doc_id):
        with self._lock:
            return copy.deepcopy(self._resolve(doc_id))

    def create(self, doc):
        with self._lock:
            new_doc = _strip_reserved(doc)
            new_doc["@id"] = self._new_id()
            new_doc["__rerum"] = {
                "createdAt": _now(),
                "history": {"prime": "root", "previous": "", "next": []},
            }
            self._documents[new_doc["@id"]] = new_doc
            return copy.deepcopy(new_doc)

    def version(self, doc, replace=False):
        """Stores `doc` as the next version of the document it names.

        With `replace` the body becomes the whole new version, otherwise it
        is merged over the prior version.
        """
        prior_id = doc.get("@id") or doc.get("id")
        if not prior_id:
            raise DocumentNotFound("Document carries no id")

        with self._lock:
            prior = self._resolve(prior_id)
            if "__deleted" in prior:
                raise DocumentNotFound(prior_id)
            history = prior["__rerum"]["history"]
            if history["next"]:
                raise VersionConflict(
                    f"{prior['@id']} was already superseded by {history['next']}"
                )

            if replace:
                new_doc = _strip_reserved(doc)
            else:
                new_doc = _strip_reserved(prior)
                new_doc.update(_strip_reserved(doc))
            new_doc["@id"] = self._new_id()
            prime = prior["@id"] if history["prime"] == "root" else history["prime"]
            new_doc["__rerum"] = {
                "createdAt": _now(),
                "history": {"prime": prime, "previous": prior["@id"], "next": []},
            }
            history["next"].append(new_doc["@id"])
            self._documents[new_doc["@id"]] = new_doc
            return copy.deepcopy(new_doc)

    def delete(self, doc_id):
        with self._lock:
            doc = self._resolve(doc_id)
            if "__deleted" in doc:
                raise DocumentNotFound(doc_id)
            doc["__deleted"] = {"time": _now()}

    def query(self, query):
        with self._lock:
            return [
                copy.deepcopy(doc)
                for doc in self._documents.values()
                if "__deleted" not in doc and matches(doc, query)
            ]

    def __len__(self):
        return len(self._documents)
