"""In-memory MongoDB configuration data for tests and local use."""

from pydantic import BaseModel


class _Data(BaseModel):
    """MongoMock configuration data.

    MongoMock needs no URI; all instances share one in-memory client.
    """

    model_config = {"extra": "forbid"}
