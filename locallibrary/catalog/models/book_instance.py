import enum

from sqlalchemy import Column, Date, Enum, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from locallibrary.common.utils.date_utils import format_long_date
from locallibrary.core.db import Base, generate_id


class BookInstanceStatus(str, enum.Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(Base):
    __tablename__ = "book_instances"
    __table_args__ = (
        Index("idx_book_instances_book_id", "book_id"),
        Index("idx_book_instances_status", "status"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    book_id = Column(String(32), ForeignKey("books.id"), nullable=False)
    imprint = Column(String(255), nullable=False)
    status = Column(
        Enum(
            BookInstanceStatus,
            name="book_instance_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=BookInstanceStatus.MAINTENANCE,
    )
    due_back = Column(Date, nullable=True)

    book = relationship("Book", lazy="raise")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", generate_id())
        super().__init__(**kwargs)

    @property
    def url(self) -> str:
        return f"/catalog/bookinstance/{self.id}"

    @property
    def due_back_formatted(self) -> str:
        return format_long_date(self.due_back)

    def __repr__(self):
        return f"<BookInstance(id={self.id}, status='{self.status}')>"
