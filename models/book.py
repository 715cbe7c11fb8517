from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Integer,
    ForeignKey,
    Table,
    Date,
    Numeric,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, MYSQL_TABLE_ARGS, table_args

# Junction table: composite PK prevents duplicate links, CASCADE cleans up join rows
book_author = Table(
    "book_author",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("book.book_id", name="fk_ba_book", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
        nullable=False,
        comment="Foreign key referencing the book",
    ),
    Column(
        "author_id",
        Integer,
        ForeignKey("author.author_id", name="fk_ba_author", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
        nullable=False,
        index=True,
        comment="Foreign key referencing the author",
    ),
    comment="Manages the many-to-many relationship between books and authors",
    **MYSQL_TABLE_ARGS,
)


class Book(BaseModel, Base):
    __tablename__ = "book"

    book_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, comment="Title of the book")
    # Nullable; uniqueness only applies to books that have one
    isbn13 = Column(String(13), nullable=True, comment="13-digit ISBN")
    num_pages = Column(Integer, nullable=True, comment="Number of pages in the book")
    publication_date = Column(Date, nullable=True, comment="Date the book was published")
    price = Column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
        server_default="0.00",
        comment="Price of the book",
    )

    language_id = Column(
        Integer,
        ForeignKey(
            "book_language.language_id",
            name="fk_book_language",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
        index=True,
        comment="Foreign key referencing the language of the book",
    )
    publisher_id = Column(
        Integer,
        ForeignKey(
            "publisher.publisher_id",
            name="fk_book_publisher",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
        index=True,
        comment="Foreign key referencing the publisher of the book",
    )

    # Relationships
    language = relationship("BookLanguage", back_populates="books")
    publisher = relationship("Publisher", back_populates="books")
    authors = relationship(
        "Author",
        secondary=book_author,
        back_populates="books",
        passive_deletes=True,
    )
    # order_line.book_id is ON DELETE RESTRICT: never touch lines from the ORM side
    order_lines = relationship("OrderLine", back_populates="book", passive_deletes="all")

    __table_args__ = table_args(
        UniqueConstraint("isbn13", name="uq_isbn13"),
        comment="List of all books available in the store",
    )
