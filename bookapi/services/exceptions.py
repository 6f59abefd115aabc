class NotFoundError(Exception):
    """The requested id does not resolve to an existing entity."""

    def __init__(self, resource: str, entity_id):
        super().__init__(f"{resource} {entity_id} not found")
        self.resource = resource
        self.entity_id = entity_id
