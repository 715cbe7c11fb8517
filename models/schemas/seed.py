from marshmallow import Schema, fields, validates, post_load

from models.schemas.common import non_blank, to_decimal_2


class LanguageSeedSchema(Schema):
    language_code = fields.String(allow_none=True, validate=non_blank(8))
    language_name = fields.String(required=True, validate=non_blank(50))


class AddressStatusSeedSchema(Schema):
    address_status = fields.String(required=True, validate=non_blank(20))


class OrderStatusSeedSchema(Schema):
    status_value = fields.String(required=True, validate=non_blank(50))


class CountrySeedSchema(Schema):
    country_name = fields.String(required=True, validate=non_blank(100))


class ShippingMethodSeedSchema(Schema):
    method_name = fields.String(required=True, validate=non_blank(100))
    cost = fields.Decimal(required=True, places=2)

    @validates("cost")
    def _validate_cost(self, value, **kwargs):
        to_decimal_2(value)

    @post_load
    def _quantize_cost(self, data, **kwargs):
        data["cost"] = to_decimal_2(data["cost"])
        return data
