from annostore.data.request.annotation_request import (
    AnnotationCreateRequest,
    AnnotationUpdateRequest,
    AnnotationDeleteRequest,
)


def test_build_create_request_with_valid_data():
    annotation = {"type": "Annotation", "body": {"value": "hello"}}

    create_request = AnnotationCreateRequest.from_annotation(annotation)

    assert bool(create_request) is True
    assert create_request.annotation == annotation


def test_build_create_request_sets_creator_without_touching_input():
    annotation = {"type": "Annotation"}

    create_request = AnnotationCreateRequest.from_annotation(annotation, creator="me")

    assert create_request.annotation["creator"] == "me"
    assert "creator" not in annotation


def test_build_create_request_keeps_existing_creator():
    annotation = {"type": "Annotation", "creator": "someone"}

    create_request = AnnotationCreateRequest.from_annotation(annotation, creator="me")

    assert create_request.annotation["creator"] == "someone"


def test_build_create_request_with_invalid_data():
    for annotation, message in [
        (None, "Missing document."),
        ("text", f"Expects {dict} but received {str}"),
    ]:
        create_request = AnnotationCreateRequest.from_annotation(annotation)

        assert bool(create_request) is False
        assert create_request.errors == [
            {"parameter": "annotation", "message": message}
        ]


def test_build_update_request_normalizes_id():
    annotation = {"id": "A1", "body": {"value": "hello!"}}

    update_request = AnnotationUpdateRequest.from_annotation(annotation, id_field="@id")

    assert bool(update_request) is True
    assert update_request.anno_id == "A1"
    assert update_request.annotation["@id"] == "A1"
    assert "@id" not in annotation


def test_build_update_request_without_id():
    update_request = AnnotationUpdateRequest.from_annotation({"body": "x"})

    assert bool(update_request) is False
    assert update_request.errors == [
        {"parameter": "@id", "message": "Missing identifier."}
    ]


def test_build_delete_request():
    assert bool(AnnotationDeleteRequest.from_id("A1")) is True
    assert AnnotationDeleteRequest.from_id("A1").anno_id == "A1"

    assert bool(AnnotationDeleteRequest.from_id("")) is False
    assert bool(AnnotationDeleteRequest.from_id(None)) is False
    assert AnnotationDeleteRequest.from_id(12).has_errors()


def test_build_create_request_accepts_empty_annotation():
    create_request = AnnotationCreateRequest.from_annotation({}, creator="me")

    assert bool(create_request) is True
    assert create_request.annotation == {"creator": "me"}
