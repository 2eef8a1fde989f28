from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from user_api.config import Settings, get_settings
from user_api.users.storage import ImageStorage, LocalImageStorage


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    # The session factory is attached to app.state by the lifespan handler.
    async with request.app.state.session_factory() as session:
        yield session


def get_image_storage(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ImageStorage:
    return LocalImageStorage(settings.upload_dir)


DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Storage = Annotated[ImageStorage, Depends(get_image_storage)]
