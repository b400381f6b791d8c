from typing import List

from sqlalchemy import Column, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from locallibrary.core.db import Base, generate_id


class Book(Base):
    __tablename__ = "books"
    __table_args__ = (
        Index("idx_books_title", "title"),
        Index("idx_books_author_id", "author_id"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    author_id = Column(String(32), ForeignKey("authors.id"), nullable=False)
    summary = Column(Text, nullable=False)
    isbn = Column(String(32), nullable=False)

    # References; only loaded when a caller asks for them to be populated
    author = relationship("Author", lazy="raise")
    genres = relationship(
        "Genre",
        secondary="book_genres",
        lazy="raise",
        viewonly=True,
        order_by="Genre.name",
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", generate_id())
        super().__init__(**kwargs)

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    @property
    def genre_ids(self) -> List[str]:
        return [genre.id for genre in self.genres]

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title}')>"


class BookGenre(Base):
    __tablename__ = "book_genres"
    __table_args__ = (
        Index("idx_book_genres_book_id", "book_id"),
        Index("idx_book_genres_genre_id", "genre_id"),
    )

    book_id = Column(String(32), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True)
    genre_id = Column(String(32), ForeignKey("genres.id"), primary_key=True)
