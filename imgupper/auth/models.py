from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from imgupper.db.base import Base, IntIDMixin, TimestampMixin


class User(IntIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    # bcrypt hash; response schemas never include it
    password: Mapped[str] = mapped_column(String(128), nullable=False)
