from dataclasses import dataclass, field
from typing import Optional

from envparse import env

from annostore.data.annotation_page import ANNOTATION_CONTEXT

DEFAULT_ENDPOINT_URL = "https://tinydev.rerum.io"

UPDATE_PATHS = {
    "PATCH": "/patch",
    "PUT": "/update",
}


def history_tip_query():
    # Only versions nobody has superseded yet.
    return {"__rerum.history.next": {"$exists": True, "$size": 0}}


class Config:
    """
    Set configuration vars from .env file.

    Everything here has a default except where noted, so the adapter can run
    against the public sandbox without any setup.
    """

    @staticmethod
    def get_endpoint_url():
        '''e.g. http://localhost:5002'''
        return env('ANNOSTORE_ENDPOINT_URL', default=DEFAULT_ENDPOINT_URL)

    @staticmethod
    def get_request_timeout():
        return env.float('ANNOSTORE_REQUEST_TIMEOUT', default=10.0)

    @staticmethod
    def get_id_field():
        return env('ANNOSTORE_ID_FIELD', default='@id')

    @staticmethod
    def get_update_method():
        return env('ANNOSTORE_UPDATE_METHOD', default='PATCH').upper()

    @staticmethod
    def get_creator():
        return env('ANNOSTORE_CREATOR', default=None)


@dataclass
class AdapterConfig:
    """Everything that differs between annotation stores."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout: float = 10.0
    id_field: str = "@id"
    update_method: str = "PATCH"
    creator: Optional[str] = None
    context: str = ANNOTATION_CONTEXT
    query_path: str = "/query"
    create_path: str = "/create"
    delete_path: str = "/delete"
    tip_query: dict = field(default_factory=history_tip_query)

    def __post_init__(self):
        self.update_method = self.update_method.upper()
        if self.update_method not in UPDATE_PATHS:
            raise ValueError(
                f"Invalid update method {self.update_method}, "
                f"expects one of {sorted(UPDATE_PATHS)}"
            )
        if self.id_field not in ("@id", "id"):
            raise ValueError(f"Invalid id field {self.id_field}")
        self.endpoint_url = self.endpoint_url.rstrip("/")

    @classmethod
    def from_env(cls, **overrides):
        settings = dict(
            endpoint_url=Config.get_endpoint_url(),
            timeout=Config.get_request_timeout(),
            id_field=Config.get_id_field(),
            update_method=Config.get_update_method(),
            creator=Config.get_creator(),
        )
        settings.update(overrides)
        return cls(**settings)

    @property
    def update_path(self):
        return UPDATE_PATHS[self.update_method]

    def url(self, path):
        return f"{self.endpoint_url}{path}"
