"""ShippingRate aggregate: flat shipping price per destination country."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier

from shopping.domain import shopping


@shopping.aggregate
class ShippingRate:
    country = Identifier(identifier=True, required=True)
    price = Float(required=True, min_value=0.0)


@shopping.repository(part_of=ShippingRate)
class ShippingRateRepository:
    def get_shipping_rate(self, country):
        """Return the rate for ``country``, or None when shipping is not offered there."""
        if not country:
            return None

        try:
            return self.get(country)
        except ObjectNotFoundError:
            return None

    def list_shipping_rates(self):
        return self._dao.query.all().items
