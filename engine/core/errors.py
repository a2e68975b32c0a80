"""
Exceptions raised by the engine.

Positioning problems are never exceptions; they are reported as violations
inside a CheckResult. Only malformed input fails fast.
"""


class UnknownEntityError(LookupError):
    """Raised when an entity id does not belong to the roster."""

    def __init__(self, entity_id: object):
        super().__init__(f"Unknown entity: {entity_id!r}")
        self.entity_id = entity_id
