import logging


def _canvas_ids(canvases):
    ids = []
    for canvas in canvases or []:
        ids.append(canvas.get("id") if isinstance(canvas, dict) else canvas)
    return ids


class CanvasAnnotationSync:
    """Feeds the AnnotationPages of the visible canvases into a viewer.

    `adapter_factory(canvas_id)` builds the storage adapter of a canvas and
    `receive_annotation(canvas_id, page_id, page)` hands a loaded page to the
    viewer state. Every retrieval revalidates against the store, so a canvas
    shown again picks up pages written by others in the meantime.
    """

    def __init__(self, adapter_factory, receive_annotation):
        self.adapter_factory = adapter_factory
        self.receive_annotation = receive_annotation
        self.adapters = {}
        self._canvas_ids = None

    def adapter_for(self, canvas_id):
        if canvas_id not in self.adapters:
            self.adapters[canvas_id] = self.adapter_factory(canvas_id)
        return self.adapters[canvas_id]

    def canvases_changed(self, canvases):
        """Call on every canvas list notification. Returns True if it fetched."""
        canvas_ids = _canvas_ids(canvases)
        if canvas_ids == self._canvas_ids:
            return False
        self._canvas_ids = canvas_ids
        self.retrieve_annotations(canvas_ids)
        return True

    def retrieve_annotations(self, canvases):
        for canvas_id in _canvas_ids(canvases):
            page = self.adapter_for(canvas_id).all(revalidate=True)
            if page is None:
                logging.warning(f"No AnnotationPage available for canvas {canvas_id}")
                continue
            self.receive_annotation(canvas_id, page.id, page.to_dict())
