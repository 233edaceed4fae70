import unittest

from up_cloudevent.datamodel import CeInteger, CeString, UCloudEventAttributes, UPriority


class TestUCloudEventAttributes(unittest.TestCase):
    """Test the common attribute set and its builder."""

    def test_builder_methods(self):
        attributes = UCloudEventAttributes.Builder().build()
        self.assertTrue(attributes.is_empty())

        attributes = (
            UCloudEventAttributes.Builder()
            .with_hash("hash")
            .with_priority(UPriority.UPRIORITY_CS1)
            .with_ttl(100)
            .with_token("token")
            .with_traceparent("traceparent")
            .build()
        )
        self.assertFalse(attributes.is_empty())

    def test_is_empty(self):
        attributes1 = UCloudEventAttributes.Builder().build()
        self.assertTrue(attributes1.is_empty())
        self.assertEqual(attributes1.hash, "")
        self.assertEqual(attributes1.priority, UPriority.UPRIORITY_UNSPECIFIED)
        self.assertEqual(attributes1.ttl, 0)
        self.assertEqual(attributes1.token, "")
        self.assertEqual(attributes1.traceparent, "")

        attributes2 = UCloudEventAttributes()
        self.assertEqual(attributes1, attributes2)

    def test_any_single_setter_makes_it_non_empty(self):
        setters = [
            lambda b: b.with_hash("h"),
            lambda b: b.with_priority(UPriority.UPRIORITY_CS0),
            lambda b: b.with_ttl(1),
            lambda b: b.with_token("t"),
            lambda b: b.with_traceparent("tp"),
        ]
        for setter in setters:
            builder = UCloudEventAttributes.Builder()
            self.assertFalse(setter(builder).build().is_empty())

    def test_accessors(self):
        attributes = (
            UCloudEventAttributes.Builder()
            .with_hash("hash")
            .with_priority(UPriority.UPRIORITY_CS1)
            .with_ttl(100)
            .with_token("token")
            .with_traceparent("traceparent")
            .build()
        )
        self.assertEqual(attributes.hash, "hash")
        self.assertEqual(attributes.priority, UPriority.UPRIORITY_CS1)
        self.assertEqual(attributes.ttl, 100)
        self.assertEqual(attributes.token, "token")
        self.assertEqual(attributes.traceparent, "traceparent")

    def test_builder_accumulates_between_builds(self):
        builder = UCloudEventAttributes.Builder()
        first = builder.with_hash("h").build()
        second = builder.with_ttl(5).build()

        self.assertEqual(first.hash, "h")
        self.assertEqual(first.ttl, 0)
        self.assertEqual(second.hash, "h")
        self.assertEqual(second.ttl, 5)

    def test_equality(self):
        attributes1 = (
            UCloudEventAttributes.Builder()
            .with_hash("hash")
            .with_priority(UPriority.UPRIORITY_CS1)
            .with_ttl(100)
            .build()
        )

        # Compare with empty attributes
        builder = UCloudEventAttributes.Builder()
        attributes2 = builder.build()
        self.assertNotEqual(attributes1, attributes2)

        # Compare different attributes
        attributes2 = (
            builder.with_hash("hash")
            .with_priority(UPriority.UPRIORITY_CS1)
            .with_token("token")
            .build()
        )
        self.assertNotEqual(attributes1, attributes2)

        # Compare same attributes
        attributes2 = builder.with_ttl(100).with_token("").build()
        self.assertEqual(attributes1, attributes2)

        # Compare again after modifying one of them
        attributes2 = builder.with_hash("different hash").build()
        self.assertNotEqual(attributes1, attributes2)

    def test_to_string(self):
        attributes = (
            UCloudEventAttributes.Builder()
            .with_hash("hash")
            .with_priority(UPriority.UPRIORITY_CS1)
            .with_ttl(100)
            .with_token("value1")
            .with_traceparent("value2")
            .build()
        )
        expected = (
            "UCloudEventAttributes{hash=hash, priority=2, ttl=100, "
            "token=value1, traceparent=value2}"
        )
        self.assertEqual(attributes.to_string(), expected)
        self.assertEqual(str(attributes), expected)

    def test_to_attribute_map(self):
        self.assertEqual(UCloudEventAttributes().to_attribute_map(), {})

        attributes = (
            UCloudEventAttributes.Builder()
            .with_priority(UPriority.UPRIORITY_CS4)
            .with_ttl(1000)
            .with_token("token")
            .build()
        )
        self.assertEqual(
            attributes.to_attribute_map(),
            {
                "priority": CeString("UPRIORITY_CS4"),
                "ttl": CeInteger(1000),
                "token": CeString("token"),
            },
        )
    def test_to_attribute_map_ttl_ceiling(self):
        largest = UCloudEventAttributes.Builder().with_ttl(2 ** 31 - 1).build()
        self.assertEqual(largest.to_attribute_map(), {"ttl": CeInteger(2 ** 31 - 1)})

        too_large = UCloudEventAttributes.Builder().with_ttl(2 ** 31).build()
        self.assertEqual(too_large.ttl, 2 ** 31)
        with self.assertRaises(ValueError):
            too_large.to_attribute_map()



if __name__ == "__main__":
    unittest.main()
