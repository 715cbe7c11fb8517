"""
Read patterns the schema is built to serve. Every join runs over a declared
(and indexed) foreign key. Results are plain dicts so they can be dumped by
the report schemas or used directly.
"""
from sqlalchemy import func

from models.address import Address
from models.address_status import AddressStatus
from models.author import Author
from models.book import Book, book_author
from models.country import Country
from models.customer import Customer, CustomerAddress
from models.language import BookLanguage
from models.order import CustOrder
from models.order_history import OrderHistory
from models.order_line import OrderLine
from models.order_status import OrderStatus
from models.publisher import Publisher
from models.shipping_method import ShippingMethod


def _dicts(query):
    return [row._asdict() for row in query.all()]


def books_by_publisher(session, publisher_id: int) -> list:
    query = (
        session.query(Book.book_id, Book.title, Book.isbn13, Book.price, Publisher.publisher_name)
        .join(Publisher, Book.publisher_id == Publisher.publisher_id)
        .filter(Publisher.publisher_id == publisher_id)
        .order_by(Book.title)
    )
    return _dicts(query)


def books_by_author(session, author_id: int) -> list:
    query = (
        session.query(Book.book_id, Book.title, Book.isbn13, Author.author_name)
        .join(book_author, Book.book_id == book_author.c.book_id)
        .join(Author, book_author.c.author_id == Author.author_id)
        .filter(Author.author_id == author_id)
        .order_by(Book.title)
    )
    return _dicts(query)


def customer_addresses(session, status: str = "Current", customer_id: int | None = None) -> list:
    """Customers with their addresses of the given status ('Current' by default)."""
    query = (
        session.query(
            Customer.customer_id,
            Customer.first_name,
            Customer.last_name,
            Customer.email,
            Address.address_id,
            Address.street_number,
            Address.street_name,
            Address.city,
            Address.postal_code,
            Country.country_name,
        )
        .join(CustomerAddress, Customer.customer_id == CustomerAddress.customer_id)
        .join(Address, CustomerAddress.address_id == Address.address_id)
        .join(AddressStatus, CustomerAddress.status_id == AddressStatus.status_id)
        .join(Country, Address.country_id == Country.country_id)
        .filter(AddressStatus.address_status == status)
    )
    if customer_id is not None:
        query = query.filter(Customer.customer_id == customer_id)
    return _dicts(query.order_by(Customer.last_name, Customer.first_name, Address.address_id))


def orders_for_customer(session, customer_id: int) -> list:
    # outer join: an order whose shipping method was deleted (SET NULL) still belongs to the customer
    query = (
        session.query(
            CustOrder.order_id,
            CustOrder.order_date,
            CustOrder.total_order_price,
            ShippingMethod.method_name.label("shipping_method"),
        )
        .outerjoin(ShippingMethod, CustOrder.shipping_method_id == ShippingMethod.method_id)
        .filter(CustOrder.customer_id == customer_id)
        .order_by(CustOrder.order_date, CustOrder.order_id)
    )
    return _dicts(query)


def order_lines(session, order_id: int) -> list:
    query = (
        session.query(
            OrderLine.line_id,
            OrderLine.quantity,
            Book.title,
            OrderLine.price.label("price_at_order_time"),
        )
        .join(Book, OrderLine.book_id == Book.book_id)
        .filter(OrderLine.order_id == order_id)
        .order_by(OrderLine.line_id)
    )
    return _dicts(query)


def latest_order_status(session, order_id: int) -> dict | None:
    """Most recent history entry of an order, or None when it has no history."""
    row = (
        session.query(OrderStatus.status_value, OrderHistory.status_date, OrderHistory.notes)
        .join(OrderStatus, OrderHistory.status_id == OrderStatus.status_id)
        .filter(OrderHistory.order_id == order_id)
        .order_by(OrderHistory.status_date.desc(), OrderHistory.history_id.desc())
        .first()
    )
    return row._asdict() if row else None


def book_count_per_language(session) -> list:
    number_of_books = func.count(Book.book_id).label("number_of_books")
    query = (
        session.query(BookLanguage.language_name, number_of_books)
        .join(BookLanguage, Book.language_id == BookLanguage.language_id)
        .group_by(BookLanguage.language_name)
        .order_by(number_of_books.desc(), BookLanguage.language_name)
    )
    return _dicts(query)
