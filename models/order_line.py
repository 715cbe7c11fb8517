from sqlalchemy import Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, table_args


class OrderLine(BaseModel, Base):
    __tablename__ = "order_line"

    line_id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey(
            "cust_order.order_id",
            name="fk_ol_order",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        nullable=False,
        index=True,
        comment="Foreign key referencing the order",
    )
    # Book: RESTRICT deletion while order lines reference it
    book_id = Column(
        Integer,
        ForeignKey(
            "book.book_id",
            name="fk_ol_book",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
        index=True,
        comment="Foreign key referencing the book included in the order",
    )
    # Snapshot of the book price when the order was placed; not kept in sync with book.price
    price = Column(Numeric(10, 2), nullable=False, comment="Price of the book at the time of order")
    quantity = Column(
        Integer,
        nullable=False,
        default=1,
        server_default="1",
        comment="Number of copies of this book in the order",
    )

    order = relationship("CustOrder", back_populates="lines")
    book = relationship("Book", back_populates="order_lines")

    __table_args__ = table_args(comment="List of books (lines) that are part of each order")

    @classmethod
    def for_book(cls, book, quantity: int = 1, **kwargs) -> "OrderLine":
        """Build a line priced at the book's current price."""
        return cls(book=book, price=book.price, quantity=quantity, **kwargs)
