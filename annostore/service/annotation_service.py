"""Service that handles creating, reading, updating and deleting the
annotations of one canvas.

The store is version-chained: every write hands back the document under a
new id. The service therefore keeps the current AnnotationPage of its canvas
in memory and replaces it with the store's answer after every write, so the
next write can chain off the right version.

Calls for the same canvas are serialized, also across services, through a
process-wide lock per canvas id. Nothing here is transactional against the
store: the last writer's response wins.
"""
import logging
import threading
import weakref

from annostore.dao.document_dao import DocumentDao
from annostore.data.annotation_page import AnnotationPage
from annostore.data.request.annotation_request import (
    AnnotationCreateRequest,
    AnnotationUpdateRequest,
    AnnotationDeleteRequest,
)
from annostore.data.response.base_response import ErrorKind
from annostore.data.response.page_response import PageResponse, PageFailure

_REGISTRY_LOCK = threading.Lock()
_CANVAS_LOCKS = weakref.WeakValueDictionary()


class CanvasLock:
    """Re-entrant lock of one canvas. Lives as long as a service holds it."""

    def __init__(self):
        self._lock = threading.RLock()

    def __enter__(self):
        return self._lock.__enter__()

    def __exit__(self, *exc_info):
        return self._lock.__exit__(*exc_info)


def canvas_lock(canvas_id):
    with _REGISTRY_LOCK:
        lock = _CANVAS_LOCKS.get(canvas_id)
        if lock is None:
            lock = CanvasLock()
            _CANVAS_LOCKS[canvas_id] = lock
        return lock


class CacheState:
    UNLOADED = "unloaded"
    EMPTY = "empty"
    LOADED = "loaded"
    STALE = "stale"


class AnnotationService:
    def __init__(self, canvas_id, document_dao: DocumentDao = None, preload=False):
        self.canvas_id = canvas_id
        self.document_dao = document_dao or DocumentDao()
        self.config = self.document_dao.config
        self.state = CacheState.UNLOADED
        self._known_page = None
        self._lock = canvas_lock(canvas_id)
        if preload:
            self.all()

    @property
    def known_page(self):
        return self._known_page

    def empty_page(self):
        return AnnotationPage.empty(
            self.canvas_id,
            creator=self.config.creator,
            context=self.config.context,
            id_field=self.config.id_field,
        )

    def invalidate(self):
        with self._lock:
            self.state = CacheState.UNLOADED
            self._known_page = None

    # -------------------------------------------------------------------------

    def all(self, revalidate=False):
        """Returns the current AnnotationPage of the canvas.

        Served from memory once loaded, unless `revalidate` is set. Returns
        None when nothing is known yet and the store cannot be reached.
        """
        with self._lock:
            if self.state == CacheState.UNLOADED or revalidate:
                self._refresh()
            return self._known_page

    def get(self, anno_id):
        page = self.all(revalidate=True)
        if page is None:
            return None
        return page.find(anno_id)

    def create(self, annotation):
        with self._lock:
            page = self.all()
            if page is None:
                return self._page_unavailable()

            create_request = AnnotationCreateRequest.from_annotation(
                annotation, creator=self.config.creator
            )
            if not create_request:
                return PageFailure(
                    page, ErrorKind.INVALID_REQUEST, errors=create_request.errors
                )

            created = self.document_dao.create_document(create_request.annotation)
            if not created:
                logging.error(
                    f"Could not create annotation on canvas {self.canvas_id}: {created.message}"
                )
                return PageFailure(page, created.kind, message=created.message)

            return self._persist_page(page.append_item(created.document))

    def update(self, annotation):
        with self._lock:
            page = self.all()
            if page is None:
                return self._page_unavailable()

            update_request = AnnotationUpdateRequest.from_annotation(
                annotation, id_field=self.config.id_field
            )
            if not update_request:
                # A document without an id was never persisted.
                kind = (
                    ErrorKind.NOT_PERSISTED
                    if isinstance(annotation, dict)
                    else ErrorKind.INVALID_REQUEST
                )
                return PageFailure(page, kind, errors=update_request.errors)

            index = page.index_of(update_request.anno_id)
            if index is None:
                logging.info(
                    f"Annotation {update_request.anno_id} is not on canvas {self.canvas_id}"
                )
                return PageFailure(page, ErrorKind.ITEM_NOT_FOUND)

            updated = self.document_dao.update_document(update_request.annotation)
            if not updated:
                logging.error(
                    f"Could not update annotation {update_request.anno_id}: {updated.message}"
                )
                return PageFailure(page, updated.kind, message=updated.message)

            return self._persist_page(page.replace_item(index, updated.document))

    def delete(self, anno_id):
        with self._lock:
            delete_request = AnnotationDeleteRequest.from_id(anno_id)
            if not delete_request:
                return PageFailure(
                    self._known_page or self.empty_page(),
                    ErrorKind.INVALID_REQUEST,
                    errors=delete_request.errors,
                )

            page = self.all()
            if page is None:
                return self._page_unavailable()

            index = page.index_of(delete_request.anno_id)
            if index is None:
                logging.info(
                    f"Annotation {delete_request.anno_id} is not on canvas {self.canvas_id}"
                )
                return PageFailure(page, ErrorKind.ITEM_NOT_FOUND)

            deleted = self.document_dao.delete_document(delete_request.anno_id)
            if not deleted:
                logging.error(
                    f"Could not delete annotation {delete_request.anno_id}: {deleted.message}"
                )
                return PageFailure(page, deleted.kind, message=deleted.message)

            return self._persist_page(page.remove_item(index))

    # -------------------------------------------------------------------------

    def _refresh(self):
        result = self.document_dao.query_current_page(
            self.canvas_id, empty_page=self.empty_page().to_dict()
        )
        if not result:
            logging.error(
                f"Could not load the AnnotationPage of canvas {self.canvas_id}: {result.message}"
            )
            return

        page = AnnotationPage.from_dict(result.document, id_field=self.config.id_field)
        self._known_page = page
        self.state = CacheState.LOADED if page.is_persisted else CacheState.EMPTY

    def _persist_page(self, new_page):
        previous_page, previous_state = self._known_page, self.state
        self.state = CacheState.STALE

        if new_page.is_persisted:
            result = self.document_dao.update_document(new_page.to_dict())
        else:
            result = self.document_dao.create_document(new_page.to_dict())

        if not result:
            logging.error(
                f"Could not persist the AnnotationPage of canvas {self.canvas_id}: "
                f"{result.message}"
            )
            self._known_page, self.state = previous_page, previous_state
            return PageFailure(
                previous_page, result.kind, message=result.message, partially_applied=True
            )

        self._known_page = AnnotationPage.from_dict(
            result.document, id_field=self.config.id_field
        )
        self.state = CacheState.LOADED
        logging.info(
            f"AnnotationPage of canvas {self.canvas_id} is now {self._known_page.id} "
            f"with {len(self._known_page.items)} items"
        )
        return PageResponse(self._known_page)

    def _page_unavailable(self):
        return PageFailure(
            self.empty_page(),
            ErrorKind.PAGE_UNAVAILABLE,
            message=f"AnnotationPage of canvas {self.canvas_id} could not be loaded",
        )
