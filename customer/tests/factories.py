import factory
from common.choices import PaymentMethod
from customer.models import Address, Profile
from factory.django import DjangoModelFactory


class AddressFactory(DjangoModelFactory):
    class Meta:
        model = Address

    user = factory.SubFactory("cart.tests.factories.UserFactory")
    full_name = "Jane Roe"
    street_address = "456 Broad Ave"
    city = "Springfield"
    postal_code = "12345"
    country = "USA"


class ProfileFactory(DjangoModelFactory):
    """Profile with a default shipping address and PayPal on file."""

    class Meta:
        model = Profile

    user = factory.SubFactory("cart.tests.factories.UserFactory")
    default_shipping_address = factory.SubFactory(AddressFactory, user=factory.SelfAttribute("..user"))
    payment_method = PaymentMethod.PAYPAL
