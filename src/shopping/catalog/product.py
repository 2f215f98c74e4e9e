"""Product aggregate: catalog entries that basket items reference by id."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String

from shopping.domain import shopping


@shopping.aggregate
class Product:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)


@shopping.repository(part_of=Product)
class ProductRepository:
    def get_product(self, product_id):
        """Return the product, or None when it is not in the catalog."""
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            return None

    def get_products_by_ids(self, product_ids):
        """Map id to product for every id found. Unknown ids are left out."""
        ids = list(dict.fromkeys(str(product_id) for product_id in product_ids))
        if not ids:
            return {}

        products = self._dao.query.filter(id__in=ids).limit(len(ids)).all().items
        return {str(product.id): product for product in products}

    def list_products(self):
        return self._dao.query.all().items
