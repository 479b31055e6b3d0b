"""Exception types shared by the edge handler and the build-time tools."""


class BlogMetaError(Exception):
    """Base class for every error raised by this package."""


class RemoteStoreUnavailable(BlogMetaError):
    """The content store could not be reached or returned an unusable payload.

    Never retried internally.  The edge handler maps it to the reduced 500
    document; the build commands map it to a non-zero exit.
    """


class TemplateMissing(BlogMetaError):
    """The base HTML document is absent or cannot host meta tags."""


class PartialEntityFailure(BlogMetaError):
    """One entity of a batch could not be materialized."""

    def __init__(self, entity_id: str, reason: str) -> None:
        super().__init__(f"Entity {entity_id!r} skipped: {reason}")
        self.entity_id = entity_id
        self.reason = reason
