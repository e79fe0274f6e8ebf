from dataclasses import dataclass

from annostore.data.annotation_page import normalize_document, resolve_id
from annostore.data.request.base_request import (
    ValidRequest,
    InvalidRequest,
    check_document,
    check_identifier,
)


@dataclass
class AnnotationCreateRequest(ValidRequest):
    annotation: dict

    @classmethod
    def from_annotation(cls, annotation, creator=None):
        invalid_req = InvalidRequest()

        check_document("annotation", annotation, invalid_req)

        if invalid_req.has_errors():
            return invalid_req

        annotation = dict(annotation)
        if creator is not None:
            annotation.setdefault("creator", creator)
        return cls(annotation=annotation)


@dataclass
class AnnotationUpdateRequest(ValidRequest):
    anno_id: str
    annotation: dict

    @classmethod
    def from_annotation(cls, annotation, id_field="@id"):
        invalid_req = InvalidRequest()

        check_document("annotation", annotation, invalid_req)
        if not invalid_req.has_errors():
            check_identifier(id_field, resolve_id(annotation, id_field), invalid_req)

        if invalid_req.has_errors():
            return invalid_req

        annotation = normalize_document(annotation, id_field)
        return cls(anno_id=annotation[id_field], annotation=annotation)


@dataclass
class AnnotationDeleteRequest(ValidRequest):
    anno_id: str

    @classmethod
    def from_id(cls, anno_id):
        invalid_req = InvalidRequest()

        check_identifier("anno_id", anno_id, invalid_req)

        if invalid_req.has_errors():
            return invalid_req

        return cls(anno_id=anno_id)
