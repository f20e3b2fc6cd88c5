from decimal import Decimal

import factory
from common.choices import PaymentMethod
from factory.django import DjangoModelFactory
from orders.models import Order, OrderItem


class OrderFactory(DjangoModelFactory):
    class Meta:
        model = Order

    user = factory.SubFactory("cart.tests.factories.UserFactory")
    shipping_full_name = "Jane Roe"
    shipping_street_address = "456 Broad Ave"
    shipping_city = "Springfield"
    shipping_postal_code = "12345"
    shipping_country = "USA"
    payment_method = PaymentMethod.PAYPAL
    items_price = Decimal("40.00")
    shipping_price = Decimal("2.00")
    tax_price = Decimal("6.00")
    total_price = Decimal("48.00")


class OrderItemFactory(DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    name = factory.LazyAttribute(lambda o: o.product.name)
    slug = factory.LazyAttribute(lambda o: o.product.slug)
    image = factory.LazyAttribute(lambda o: o.product.image)
    unit_price = factory.LazyAttribute(lambda o: o.product.price)
    quantity = 2
