from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from imgupper.db.base import Base, IntIDMixin, TimestampMixin


class StoredFile(IntIDMixin, TimestampMixin, Base):
    """Metadata row for an object written to the bucket."""
    __tablename__ = "files"
    __table_args__ = (
        Index("ix_files_user_created", "user_id", "created_at"),
    )

    # Ownership is checked before insert, not by a foreign key
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    filename: Mapped[str] = mapped_column(String(1024), nullable=False)
    filesize: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    bucket_url: Mapped[str] = mapped_column(Text, nullable=False)
