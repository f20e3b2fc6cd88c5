from decimal import Decimal

import factory
from catalog.models import Product, Review
from factory import Faker
from factory.django import DjangoModelFactory


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    slug = factory.LazyAttribute(lambda o: "-".join(o.name.lower().split()))
    category = "Shirts"
    brand = Faker("company")
    description = Faker("sentence")
    images = factory.LazyFunction(lambda: ["/images/p1-1.jpg", "/images/p1-2.jpg"])
    price = Decimal("20.00")
    stock = 10


class ReviewFactory(DjangoModelFactory):
    class Meta:
        model = Review

    user = factory.SubFactory("cart.tests.factories.UserFactory")
    product = factory.SubFactory(ProductFactory)
    title = "Solid pick"
    description = Faker("sentence")
    rating = 4
