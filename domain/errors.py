class MixologyError(Exception):
    pass


class ValidationError(MixologyError):
    """A request field is missing or out of range. The message is user facing."""


class NotFoundError(MixologyError):
    pass


class RemoteGenerationError(MixologyError):
    """The completion service could not produce a usable recipe.

    Never surfaced to callers, the deterministic generators take over.
    """


class PersistenceError(MixologyError):
    pass
