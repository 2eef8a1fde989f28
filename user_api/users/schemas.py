import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request fields are optional so that the validation rules, not the parser,
# decide how a missing value is reported.
class CreateUserRequest(CamelModel):
    full_name: str | None = None
    email: str | None = None
    password: str | None = None


class EditUserRequest(CamelModel):
    email: str | None = None
    full_name: str | None = None
    password: str | None = None


class DeleteUserRequest(CamelModel):
    email: str | None = None


class MessageResponse(CamelModel):
    message: str


class CreateUserResponse(MessageResponse):
    user_id: uuid.UUID


class UploadImageResponse(MessageResponse):
    path: str


class UserSummary(CamelModel):
    id: uuid.UUID
    full_name: str
    email: str
    # Only populated when EXPOSE_PASSWORD_HASH is enabled.
    password: str | None = None
