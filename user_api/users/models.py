from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from user_api.db.base import Base, TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(128), nullable=False)
    # Set only after a successful image upload.
    image_path: Mapped[str | None] = mapped_column(String(512), nullable=True)
