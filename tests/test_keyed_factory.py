"""Tests for KeyedFactory, Creator and variant_table."""

import threading
from enum import Enum

import pytest

from protoforge import (
    Creator,
    InvalidOperationError,
    KeyedFactory,
    ObjectMetadata,
    Performer,
    RegistrationError,
    UnknownKeyError,
    variant_table,
)
from protoforge.builtin_products import (
    DeliveryReceipt,
    EmailCreator,
    EmailNotification,
    PushNotification,
    SmsCreator,
    SmsNotification,
)


class TestCentralizedFactory:
    """Lookup-based keyed factory."""

    def test_create_returns_bound_variant(self, notifications):
        assert isinstance(notifications.create("email"), EmailNotification)
        assert isinstance(notifications.create("sms"), SmsNotification)
        assert isinstance(notifications.create("push"), PushNotification)

    def test_create_returns_new_instance_each_time(self, notifications):
        assert notifications.create("email") is not notifications.create("email")

    def test_create_passes_keyword_arguments(self, notifications):
        product = notifications.create("email", recipient="ops@example.com")
        assert product.recipient == "ops@example.com"

    def test_products_satisfy_capability_contract(self, notifications):
        for key in notifications.keys():
            product = notifications.create(key)
            assert isinstance(product, Performer)
            receipt = product.perform("Build finished")
            assert receipt == DeliveryReceipt(product.channel, "default", "Build finished")

    def test_unknown_key_raises_and_leaves_registry_unchanged(self, notifications):
        before = notifications.keys()

        with pytest.raises(UnknownKeyError) as exc_info:
            notifications.create("pigeon")

        assert exc_info.value.key == "pigeon"
        assert exc_info.value.available == ["email", "push", "sms"]
        assert "pigeon" in str(exc_info.value)
        assert notifications.keys() == before

    def test_unknown_key_error_is_lookup_error(self):
        with pytest.raises(LookupError):
            KeyedFactory().create("missing")

    def test_rebinding_replaces_previous_binding(self):
        factory = KeyedFactory()
        factory.register("channel", EmailNotification)
        factory.register("channel", SmsNotification, description="replacement")

        assert isinstance(factory.create("channel"), SmsNotification)
        assert factory.get_metadata("channel").description == "replacement"
        assert len(factory) == 1

    def test_register_class_callable_and_creator(self):
        factory = KeyedFactory()
        factory.register("class", EmailNotification)
        factory.register("callable", lambda **kw: SmsNotification(**kw))
        factory.register("creator", EmailCreator())
        factory.register("creator_class", SmsCreator)

        types = {entry["name"]: entry["type"] for entry in factory.list_available()}
        assert types == {
            "class": "class",
            "callable": "callable",
            "creator": "creator",
            "creator_class": "creator",
        }
        assert isinstance(factory.create("creator_class"), SmsNotification)

    @pytest.mark.parametrize("key", [None, ""])
    def test_register_rejects_empty_key(self, key):
        factory = KeyedFactory()
        with pytest.raises(RegistrationError):
            factory.register(key, EmailNotification)
        assert len(factory) == 0

    def test_register_rejects_non_callable(self):
        factory = KeyedFactory()
        with pytest.raises(RegistrationError):
            factory.register("email", None)
        with pytest.raises(RegistrationError):
            factory.register("email", "not callable")
        assert "email" not in factory

    def test_enum_keys(self):
        class Channel(Enum):
            EMAIL = "email"
            SMS = "sms"

        factory = KeyedFactory()
        factory.register(Channel.EMAIL, EmailNotification)
        factory.register(Channel.SMS, SmsNotification)

        assert isinstance(factory.create(Channel.SMS), SmsNotification)
        with pytest.raises(UnknownKeyError):
            factory.create("sms")

    def test_unregister_and_clear(self, notifications):
        notifications.unregister("sms")
        assert "sms" not in notifications
        with pytest.raises(UnknownKeyError):
            notifications.unregister("sms")

        notifications.clear()
        assert notifications.keys() == []

    def test_list_available_filters_by_category(self):
        factory = KeyedFactory()
        factory.register(
            "email",
            EmailNotification,
            metadata=ObjectMetadata(name="email", category="messaging", tags=["smtp"]),
        )
        factory.register("report", dict, description="Plain dict")

        messaging = factory.list_available(category="messaging")
        assert [entry["name"] for entry in messaging] == ["email"]
        assert messaging[0]["tags"] == ["smtp"]
        assert len(factory.list_available()) == 2

    def test_description_defaults_to_docstring_summary(self):
        class Fax:
            """Fax channel.

            Kept for legacy recipients.
            """

        factory = KeyedFactory()
        factory.register("fax", Fax)
        factory.register("pager", Fax, description="Pager channel")

        assert factory.get_metadata("fax").description == "Fax channel."
        assert factory.get_metadata("pager").description == "Pager channel"

    def test_get_metadata_unknown_returns_none(self):
        assert KeyedFactory().get_metadata("nope") is None


class TestDelegatedFactory:
    """Creator subclasses with the shared operate() helper."""

    def test_operate_creates_and_performs(self):
        receipt = EmailCreator().operate("Hello", recipient="a@example.com")
        assert receipt == DeliveryReceipt("email", "a@example.com", "Hello")

    def test_operate_propagates_invalid_operation(self):
        with pytest.raises(InvalidOperationError):
            SmsCreator().operate("x" * 161)
        with pytest.raises(InvalidOperationError):
            EmailCreator().operate("")

    def test_operate_rejects_product_without_contract(self):
        class BrokenCreator(Creator):
            def factory_method(self, **kwargs):
                return object()

        with pytest.raises(InvalidOperationError, match="perform"):
            BrokenCreator().operate("Hello")

    def test_creator_is_abstract(self):
        with pytest.raises(TypeError):
            Creator()

    def test_new_variant_added_by_registration_only(self, notifications):
        """A new channel needs a new subclass and a registration, nothing else."""

        class SlackMessage:
            channel = "slack"

            def __init__(self, recipient="#general"):
                self.recipient = recipient

            def perform(self, payload):
                return DeliveryReceipt(self.channel, self.recipient, payload)

        class SlackCreator(Creator):
            def factory_method(self, **kwargs):
                return SlackMessage(**kwargs)

        notifications.register("slack", SlackCreator())

        assert notifications.create("slack").perform("deploy done") == DeliveryReceipt(
            "slack", "#general", "deploy done"
        )
        assert SlackCreator().operate("hi", recipient="#ops").recipient == "#ops"
        # Existing variants are unaffected.
        assert isinstance(notifications.create("email"), EmailNotification)


class TestVariantTable:
    def test_dispatch_on_tag_with_closures(self):
        shapes = variant_table(
            {
                "circle": lambda radius=1: ("circle", radius),
                "square": lambda side=1: ("square", side),
            }
        )

        assert shapes.create("circle", radius=3) == ("circle", 3)
        assert shapes.create("square") == ("square", 1)
        with pytest.raises(UnknownKeyError):
            shapes.create("triangle")


class TestSharedInstance:
    def test_get_instance_returns_same_object(self):
        assert KeyedFactory.get_instance() is KeyedFactory.get_instance()

    def test_reset_instance(self):
        first = KeyedFactory.get_instance()
        first.register("email", EmailNotification)
        KeyedFactory.reset_instance()

        second = KeyedFactory.get_instance()
        assert second is not first
        assert "email" not in second

    def test_concurrent_get_instance_initializes_once(self):
        instances = []
        barrier = threading.Barrier(8)

        def grab():
            barrier.wait()
            instances.append(KeyedFactory.get_instance())

        threads = [threading.Thread(target=grab) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({id(i) for i in instances}) == 1
