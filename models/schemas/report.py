from marshmallow import Schema, fields


class BookByPublisherSchema(Schema):
    book_id = fields.Integer()
    title = fields.String()
    isbn13 = fields.String(allow_none=True)
    price = fields.Decimal(as_string=True)
    publisher_name = fields.String()


class BookByAuthorSchema(Schema):
    book_id = fields.Integer()
    title = fields.String()
    isbn13 = fields.String(allow_none=True)
    author_name = fields.String()


class CustomerAddressSchema(Schema):
    customer_id = fields.Integer()
    first_name = fields.String()
    last_name = fields.String()
    email = fields.String()
    address_id = fields.Integer()
    street_number = fields.String(allow_none=True)
    street_name = fields.String(allow_none=True)
    city = fields.String()
    postal_code = fields.String(allow_none=True)
    country_name = fields.String()


class CustomerOrderSchema(Schema):
    order_id = fields.Integer()
    order_date = fields.DateTime()
    total_order_price = fields.Decimal(as_string=True, allow_none=True)
    shipping_method = fields.String(allow_none=True)


class OrderLineSchema(Schema):
    line_id = fields.Integer()
    quantity = fields.Integer()
    title = fields.String()
    price_at_order_time = fields.Decimal(as_string=True)


class OrderStatusSchema(Schema):
    status_value = fields.String()
    status_date = fields.DateTime()
    notes = fields.String(allow_none=True)


class LanguageCountSchema(Schema):
    language_name = fields.String()
    number_of_books = fields.Integer()
