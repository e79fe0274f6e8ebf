"""Remote calls against a versioned (RERUM style) document store.

Every call is bounded by the configured timeout and never raises for
transport problems: failures come back as a falsy `StoreFailure` carrying
the best known fallback document.
"""
import logging

import requests

from annostore.data.annotation_page import resolve_id
from annostore.data.response.base_response import ErrorKind
from annostore.data.response.store_response import StoredDocument, StoreFailure
from annostore.shared.config import AdapterConfig

JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}


class DocumentDao:
    def __init__(self, config: AdapterConfig = None, session=None):
        self.config = config or AdapterConfig.from_env()
        if session is None:
            session = requests.Session()
            session.headers.update(JSON_HEADERS)
        self.session = session

    def query_current_page(self, canvas_id, empty_page=None):
        """Looks up the history tip AnnotationPage targeting `canvas_id`.

        Returns `empty_page` when the store has none, and a failure whose
        document is None when the store could not be asked.
        """
        query = dict(self.config.tip_query)
        query.update({"target": canvas_id, "type": "AnnotationPage"})

        result = self._send("POST", self.config.query_path, payload=query)
        if not result:
            return result

        matches = result.document
        if not isinstance(matches, list):
            logging.error(
                f"Query for canvas {canvas_id} returned {type(matches)} instead of a list"
            )
            return StoreFailure(ErrorKind.TRANSPORT_FAILURE, message="Malformed query response")
        if len(matches) == 0:
            return StoredDocument(empty_page)
        if not isinstance(matches[0], dict):
            logging.error(
                f"Query for canvas {canvas_id} matched {type(matches[0])} instead of a document"
            )
            return StoreFailure(ErrorKind.TRANSPORT_FAILURE, message="Malformed query response")
        if len(matches) > 1:
            logging.warning(
                f"Found {len(matches)} current AnnotationPages for canvas {canvas_id}, "
                "using the first one"
            )
        return StoredDocument(matches[0])

    def create_document(self, doc):
        result = self._send("POST", self.config.create_path, payload=doc, fallback=doc)
        return self._require_id(result, doc)

    def update_document(self, doc):
        prior_id = resolve_id(doc, self.config.id_field)
        if prior_id is None:
            return StoreFailure(
                ErrorKind.NOT_PERSISTED, document=doc, message="Document has no id to update"
            )
        result = self._send(
            self.config.update_method, self.config.update_path, payload=doc, fallback=doc
        )
        return self._require_id(result, doc)

    def delete_document(self, doc_id):
        if not doc_id:
            return StoreFailure(ErrorKind.NOT_PERSISTED, message="Missing id to delete")
        return self._send(
            "DELETE", f"{self.config.delete_path}/{doc_id}", expect_body=False
        )

    def _require_id(self, result, doc):
        if not result:
            return result
        if resolve_id(result.document, self.config.id_field) is None:
            logging.error(f"Store response has no id, treating {doc!r} as not persisted")
            return StoreFailure(
                ErrorKind.NOT_PERSISTED, document=doc, message="Store response has no id"
            )
        return result

    def _send(self, method, path, payload=None, fallback=None, expect_body=True):
        url = self.config.url(path)
        try:
            response = self.session.request(
                method, url, json=payload, timeout=self.config.timeout
            )
            response.raise_for_status()
            document = response.json() if expect_body else None
        except requests.exceptions.Timeout as e:
            logging.error(f"{method} {url} timed out after {self.config.timeout}s: {e}")
            return StoreFailure(ErrorKind.TRANSPORT_TIMEOUT, document=fallback, message=str(e))
        except requests.exceptions.RequestException as e:
            logging.error(f"{method} {url} failed: {e}")
            return StoreFailure(ErrorKind.TRANSPORT_FAILURE, document=fallback, message=str(e))
        except ValueError as e:
            logging.error(f"{method} {url} returned a body that is not JSON: {e}")
            return StoreFailure(ErrorKind.TRANSPORT_FAILURE, document=fallback, message=str(e))

        logging.info(f"{method} {url} -> {response.status_code}")
        return StoredDocument(document)
