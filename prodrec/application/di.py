from dishka import AsyncContainer, make_async_container

from prodrec.config import Config
from prodrec.domain.record.util.di.provider import RecordProvider
from prodrec.infrastructure.persistence.di import PersistenceProvider
from prodrec.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    if config is None:
        config = Config()  # type: ignore[call-arg]

    return make_async_container(
        PersistenceProvider(),
        RecordProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
