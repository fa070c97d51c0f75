"""Entity declarations for the ``createEntities`` section of a test file.

Each declared entity is a single-key document whose key names its kind,
e.g. ``{"client": {"id": "client0"}}``. ``TestFileEntity`` is a tagged
union over the six kinds; documents naming zero or several kinds are
rejected at parse time.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel

ObserveEvent = Literal[
    "commandStartedEvent",
    "commandSucceededEvent",
    "commandFailedEvent",
    "poolCreatedEvent",
    "poolReadyEvent",
    "poolClearedEvent",
    "poolClosedEvent",
    "connectionCreatedEvent",
    "connectionReadyEvent",
    "connectionClosedEvent",
    "connectionCheckOutStartedEvent",
    "connectionCheckOutFailedEvent",
    "connectionCheckedOutEvent",
    "connectionCheckedInEvent",
]


class _SchemaModel(BaseModel):
    model_config = {"extra": "forbid", "alias_generator": to_camel}


class ServerApi(_SchemaModel):
    """Declared stable API options for a client."""

    version: Literal["1"]
    strict: bool | None = None
    deprecation_errors: bool | None = None


class StoreEventsAsEntity(_SchemaModel):
    id: str
    events: list[str]


class ReadConcern(_SchemaModel):
    # Custom levels are passed through to the server untouched.
    level: str


class HedgeOptions(_SchemaModel):
    enabled: bool


class ReadPreference(_SchemaModel):
    mode: str
    tag_sets: list[dict[str, str]] | None = None
    max_staleness_seconds: int | None = None
    hedge: HedgeOptions | None = None


class WriteConcern(_SchemaModel):
    w: int | str | None = None
    journal: bool | None = None
    wtimeout_ms: int | None = Field(default=None, alias="wtimeoutMS")


class CollectionOrDatabaseOptions(_SchemaModel):
    """Read/write options shared by database and collection entities."""

    read_concern: ReadConcern | None = None
    read_preference: ReadPreference | None = None
    write_concern: WriteConcern | None = None


class TransactionOptions(_SchemaModel):
    read_concern: ReadConcern | None = None
    read_preference: ReadPreference | None = None
    write_concern: WriteConcern | None = None
    max_commit_time_ms: int | None = Field(default=None, alias="maxCommitTimeMS")


class SessionOptions(_SchemaModel):
    causal_consistency: bool | None = None
    snapshot: bool | None = None
    default_transaction_options: TransactionOptions | None = None


class Client(_SchemaModel):
    """A client entity and the events it should observe."""

    id: str
    uri_options: dict[str, Any] | None = None
    use_multiple_mongoses: bool | None = None
    observe_events: list[ObserveEvent] | None = None
    ignore_command_monitoring_events: list[str] | None = None
    observe_sensitive_commands: bool | None = None
    server_api: ServerApi | None = None
    store_events_as_entities: list[StoreEventsAsEntity] | None = None


class Database(_SchemaModel):
    id: str
    client: str
    database_name: str
    database_options: CollectionOrDatabaseOptions | None = None


class Collection(_SchemaModel):
    id: str
    database: str
    collection_name: str
    collection_options: CollectionOrDatabaseOptions | None = None


class Session(_SchemaModel):
    id: str
    client: str
    session_options: SessionOptions | None = None


class Bucket(_SchemaModel):
    id: str
    database: str
    bucket_options: dict[str, Any] | None = None


class Thread(_SchemaModel):
    id: str


# -- Tagged union ------------------------------------------------------------


class _EntityVariant(_SchemaModel):
    kind: ClassVar[str]

    @property
    def entity(self) -> Client | Database | Collection | Session | Bucket | Thread:
        """The kind-specific payload."""
        return getattr(self, self.kind)

    @property
    def id(self) -> str:
        return self.entity.id


class ClientEntity(_EntityVariant):
    kind: ClassVar[str] = "client"
    client: Client


class DatabaseEntity(_EntityVariant):
    kind: ClassVar[str] = "database"
    database: Database


class CollectionEntity(_EntityVariant):
    kind: ClassVar[str] = "collection"
    collection: Collection


class SessionEntity(_EntityVariant):
    kind: ClassVar[str] = "session"
    session: Session


class BucketEntity(_EntityVariant):
    kind: ClassVar[str] = "bucket"
    bucket: Bucket


class ThreadEntity(_EntityVariant):
    kind: ClassVar[str] = "thread"
    thread: Thread


ENTITY_KINDS: tuple[str, ...] = (
    "client",
    "database",
    "collection",
    "session",
    "bucket",
    "thread",
)


def _entity_kind(value: Any) -> str | None:
    """Discriminate an entity document by its single key."""
    if isinstance(value, dict):
        if len(value) == 1:
            (key,) = value
            if key in ENTITY_KINDS:
                return key
        return None
    return getattr(value, "kind", None)


TestFileEntity = Annotated[
    Union[
        Annotated[ClientEntity, Tag("client")],
        Annotated[DatabaseEntity, Tag("database")],
        Annotated[CollectionEntity, Tag("collection")],
        Annotated[SessionEntity, Tag("session")],
        Annotated[BucketEntity, Tag("bucket")],
        Annotated[ThreadEntity, Tag("thread")],
    ],
    Discriminator(
        _entity_kind,
        custom_error_type="invalid_entity",
        custom_error_message=(
            "Entity must declare exactly one of: " + ", ".join(ENTITY_KINDS)
        ),
    ),
]
