from sqlalchemy import CheckConstraint, Column, String

from locallibrary.core.db import Base, generate_id


class Genre(Base):
    __tablename__ = "genres"
    __table_args__ = (
        CheckConstraint("length(name) >= 3", name="ck_genres_name_length"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False, unique=True)

    def __init__(self, **kwargs):
        kwargs.setdefault("id", generate_id())
        super().__init__(**kwargs)

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"
