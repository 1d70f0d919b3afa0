"""Domain exceptions raised by the service layer.

Routers translate these into HTTP responses; the CLI prints them.
"""


class CareerTrailError(Exception):
    """Base exception for CareerTrail errors."""
    pass


class NotFoundError(CareerTrailError):
    """Row does not exist or is not owned by the requesting user."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ConflictError(CareerTrailError):
    """Write would violate a uniqueness or state rule."""
    pass


class UpstreamError(CareerTrailError):
    """An external service (language model, LinkedIn) failed."""
    pass


class NotConfiguredError(CareerTrailError):
    """An optional integration is missing its credentials."""
    pass
