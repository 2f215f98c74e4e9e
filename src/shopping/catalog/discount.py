"""Discount aggregate: percentage discounts for single items or whole baskets."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String

from shopping.domain import shopping


@shopping.aggregate
class Discount:
    name = String(required=True, max_length=255)
    percentage = Float(required=True, min_value=0.0, max_value=100.0)  # 0-100, not a fraction


@shopping.repository(part_of=Discount)
class DiscountRepository:
    def get_discount(self, discount_id):
        try:
            return self.get(discount_id)
        except ObjectNotFoundError:
            return None

    def get_discounts_by_ids(self, discount_ids):
        ids = list(dict.fromkeys(str(discount_id) for discount_id in discount_ids if discount_id))
        if not ids:
            return {}

        discounts = self._dao.query.filter(id__in=ids).limit(len(ids)).all().items
        return {str(discount.id): discount for discount in discounts}

    def list_discounts(self):
        return self._dao.query.all().items
