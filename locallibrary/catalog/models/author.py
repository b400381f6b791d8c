from sqlalchemy import Column, Date, Index, String

from locallibrary.common.utils.date_utils import format_long_date
from locallibrary.core.db import Base, generate_id


class Author(Base):
    __tablename__ = "authors"
    __table_args__ = (Index("idx_authors_family_name", "family_name"),)

    id = Column(String(32), primary_key=True, default=generate_id)
    first_name = Column(String(100), nullable=False)
    family_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)

    def __init__(self, **kwargs):
        kwargs.setdefault("id", generate_id())
        super().__init__(**kwargs)

    # Derived values, computed on read and never stored

    @property
    def name(self) -> str:
        return f"{self.family_name}, {self.first_name}"

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"

    @property
    def date_of_birth_formatted(self) -> str:
        return format_long_date(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return format_long_date(self.date_of_death)

    @property
    def lifespan(self) -> str:
        if self.date_of_birth is None and self.date_of_death is None:
            return ""
        return f"{self.date_of_birth_formatted} - {self.date_of_death_formatted}".strip()

    def __repr__(self):
        return f"<Author(id={self.id}, name='{self.name}')>"
