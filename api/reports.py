"""
Read-only reporting endpoints over the bookstore schema.

GET /reports/publishers/<publisher_id>/books
GET /reports/authors/<author_id>/books
GET /reports/customers/addresses?status=Current&customer_id=<id>
GET /reports/customers/<customer_id>/orders
GET /reports/orders/<order_id>/lines
GET /reports/orders/<order_id>/status
GET /reports/languages/book-counts
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, abort

from models import storage, queries
from models.address_status import AddressStatus
from models.author import Author
from models.customer import Customer
from models.order import CustOrder
from models.publisher import Publisher
from models.seed import lookup_map
from models.schemas.report import (
    BookByPublisherSchema,
    BookByAuthorSchema,
    CustomerAddressSchema,
    CustomerOrderSchema,
    OrderLineSchema,
    OrderStatusSchema,
    LanguageCountSchema,
)

bp = Blueprint("reports", __name__)

books_by_publisher_schema = BookByPublisherSchema(many=True)
books_by_author_schema = BookByAuthorSchema(many=True)
customer_addresses_schema = CustomerAddressSchema(many=True)
customer_orders_schema = CustomerOrderSchema(many=True)
order_lines_schema = OrderLineSchema(many=True)
order_status_schema = OrderStatusSchema()
language_counts_schema = LanguageCountSchema(many=True)


def get_or_404(cls, pk: int):
    obj = storage.get(cls, pk)
    if obj is None:
        abort(404)
    return obj


def parse_optional_int(name: str) -> int | None:
    val = request.args.get(name)
    if val is None or val == "":
        return None
    try:
        return int(val)
    except ValueError:
        abort(400, description=f"{name} must be an integer")


@bp.get("/publishers/<int:publisher_id>/books")
def books_by_publisher(publisher_id: int):
    """
    Books published by a publisher
    ---
    tags: [Reports]
    parameters:
      - in: path
        name: publisher_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Publisher not found }
    """
    get_or_404(Publisher, publisher_id)
    rows = queries.books_by_publisher(storage.get_session(), publisher_id)
    return jsonify({"data": books_by_publisher_schema.dump(rows)})


@bp.get("/authors/<int:author_id>/books")
def books_by_author(author_id: int):
    """
    Books written by an author
    ---
    tags: [Reports]
    parameters:
      - in: path
        name: author_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Author not found }
    """
    get_or_404(Author, author_id)
    rows = queries.books_by_author(storage.get_session(), author_id)
    return jsonify({"data": books_by_author_schema.dump(rows)})


@bp.get("/customers/addresses")
def customer_addresses():
    """
    Customers and their addresses with a given status
    ---
    tags: [Reports]
    parameters:
      - in: query
        name: status
        type: string
        default: Current
        description: "One of the address_status values (Current, Old, Billing, Shipping)"
      - in: query
        name: customer_id
        type: integer
    responses:
      200: { description: OK }
      400: { description: Unknown status or bad customer_id }
    """
    session = storage.get_session()
    status = request.args.get("status", "Current")
    customer_id = parse_optional_int("customer_id")
    if status not in lookup_map(session, AddressStatus):
        abort(400, description=f"Unknown address status: {status}")
    rows = queries.customer_addresses(session, status=status, customer_id=customer_id)
    return jsonify({"data": customer_addresses_schema.dump(rows), "meta": {"status": status}})


@bp.get("/customers/<int:customer_id>/orders")
def customer_orders(customer_id: int):
    """
    Orders placed by a customer
    ---
    tags: [Reports]
    parameters:
      - in: path
        name: customer_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Customer not found }
    """
    get_or_404(Customer, customer_id)
    rows = queries.orders_for_customer(storage.get_session(), customer_id)
    return jsonify({"data": customer_orders_schema.dump(rows)})


@bp.get("/orders/<int:order_id>/lines")
def order_lines(order_id: int):
    """
    Books included in an order, at the price paid
    ---
    tags: [Reports]
    parameters:
      - in: path
        name: order_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Order not found }
    """
    get_or_404(CustOrder, order_id)
    rows = queries.order_lines(storage.get_session(), order_id)
    return jsonify({"data": order_lines_schema.dump(rows)})


@bp.get("/orders/<int:order_id>/status")
def order_status(order_id: int):
    """
    Most recent status of an order (null when it has no history yet)
    ---
    tags: [Reports]
    parameters:
      - in: path
        name: order_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Order not found }
    """
    get_or_404(CustOrder, order_id)
    row = queries.latest_order_status(storage.get_session(), order_id)
    return jsonify({"data": order_status_schema.dump(row) if row else None})


@bp.get("/languages/book-counts")
def language_book_counts():
    """
    Number of books per language, most common first
    ---
    tags: [Reports]
    responses:
      200: { description: OK }
    """
    rows = queries.book_count_per_language(storage.get_session())
    return jsonify({"data": language_counts_schema.dump(rows)})
