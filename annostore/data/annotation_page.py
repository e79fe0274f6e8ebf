import copy
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

ANNOTATION_PAGE_TYPE = "AnnotationPage"
ANNOTATION_CONTEXT = "http://www.w3.org/ns/anno.jsonld"

# Keys the page owns itself, everything else is carried in `extra`.
_PAGE_KEYS = {"@context", "type", "target", "items", "creator", "id", "@id"}


def resolve_id(doc, id_field="@id"):
    """Returns the identifier of a store document, or None if it has none.

    The configured field wins, then `id`, then `@id`.
    """
    if not isinstance(doc, dict):
        return None
    for key in (id_field, "id", "@id"):
        value = doc.get(key)
        if value:
            return value
    return None


def normalize_document(doc, id_field="@id"):
    """Deep copy of `doc` with its identifier stored under `id_field`."""
    normalized = copy.deepcopy(doc)
    doc_id = resolve_id(normalized, id_field)
    if doc_id is not None:
        normalized[id_field] = doc_id
    return normalized


@dataclass(frozen=True)
class AnnotationPage:
    target: str
    items: Tuple[Dict, ...] = ()
    id: Optional[str] = None
    creator: Optional[str] = None
    type: str = ANNOTATION_PAGE_TYPE
    context: str = ANNOTATION_CONTEXT
    extra: Dict = field(default_factory=dict)
    id_field: str = "@id"

    @classmethod
    def empty(cls, target, creator=None, context=ANNOTATION_CONTEXT, id_field="@id"):
        return cls(target=target, creator=creator, context=context, id_field=id_field)

    @classmethod
    def from_dict(cls, dict_data, id_field="@id"):
        items = tuple(
            normalize_document(item, id_field) for item in dict_data.get("items") or []
        )
        extra = {
            key: copy.deepcopy(value)
            for key, value in dict_data.items()
            if key not in _PAGE_KEYS and key != id_field
        }
        return cls(
            target=dict_data.get("target"),
            items=items,
            id=resolve_id(dict_data, id_field),
            creator=dict_data.get("creator"),
            type=dict_data.get("type", ANNOTATION_PAGE_TYPE),
            context=dict_data.get("@context", ANNOTATION_CONTEXT),
            extra=extra,
            id_field=id_field,
        )

    def to_dict(self):
        dict_data = copy.deepcopy(self.extra)
        dict_data.update(
            {
                "@context": self.context,
                "type": self.type,
                "target": self.target,
                "items": [copy.deepcopy(item) for item in self.items],
            }
        )
        if self.id is not None:
            dict_data[self.id_field] = self.id
        if self.creator is not None:
            dict_data["creator"] = self.creator
        return dict_data

    @property
    def is_persisted(self):
        return self.id is not None

    def index_of(self, anno_id):
        """Position of the first item whose id is `anno_id`, or None.

        Items given by reference (a bare IRI string) match on the string.
        """
        if not anno_id:
            return None
        for i, item in enumerate(self.items):
            item_id = item if isinstance(item, str) else resolve_id(item, self.id_field)
            if item_id == anno_id:
                return i
        return None

    def find(self, anno_id):
        i = self.index_of(anno_id)
        if i is None:
            return None
        return copy.deepcopy(self.items[i])

    def with_items(self, items):
        return replace(self, items=tuple(items))

    def append_item(self, item):
        return self.with_items(self.items + (normalize_document(item, self.id_field),))

    def replace_item(self, index, item):
        items = list(self.items)
        items[index] = normalize_document(item, self.id_field)
        return self.with_items(items)

    def remove_item(self, index):
        return self.with_items(self.items[:index] + self.items[index + 1:])
