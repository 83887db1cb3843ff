from pydantic import BaseModel


class Aggregate(BaseModel):
    """Base class for aggregate roots. State changes go through its methods."""


class Entity(BaseModel):
    """Base class for entities owned by an aggregate and referenced by id."""
