import pytest

from up_cloudevent.datamodel import CeInteger, CeString, CeUnset, CloudEvent


def test_default_envelope_is_empty():
    cloud_event = CloudEvent()
    assert cloud_event.id == ""
    assert cloud_event.data is None
    assert dict(cloud_event.attributes) == {}
    assert not cloud_event.is_complete()


def test_is_complete_requires_all_headers(request_event):
    assert request_event.is_complete()
    for name in ("id", "source", "spec_version", "type"):
        assert not request_event.replace(**{name: ""}).is_complete()


def test_attributes_are_read_only(request_event):
    with pytest.raises(TypeError):
        request_event.attributes["ttl"] = CeInteger(1)


def test_envelope_does_not_alias_caller_dict():
    attributes = {"sink": CeString("1")}
    cloud_event = CloudEvent(id="a", attributes=attributes)
    attributes["ttl"] = CeInteger(5)
    assert "ttl" not in cloud_event.attributes


def test_equality_ignores_attribute_order():
    first = CloudEvent(id="a", attributes={"x": CeString("1"), "y": CeInteger(2)})
    second = CloudEvent(id="a", attributes={"y": CeInteger(2), "x": CeString("1")})
    assert first == second
    assert first != second.with_attribute("z", CeUnset())


def test_with_attribute_returns_copy(request_event):
    updated = request_event.with_attribute("ttl", CeInteger(5))
    assert updated.attributes["ttl"] == CeInteger(5)
    assert request_event.attributes["ttl"] == CeInteger(88)
    assert "ttl" not in updated.without_attribute("ttl").attributes


def test_unset_is_distinct_from_absent():
    cloud_event = CloudEvent(attributes={"sink": CeUnset()})
    assert "sink" in cloud_event.attributes
    assert cloud_event.get_attribute("sink") == CeUnset()
    assert cloud_event.get_attribute("ttl") is None


def test_rejects_non_attribute_values():
    with pytest.raises(TypeError):
        CloudEvent(attributes={"ttl": 88})


def test_bytearray_data_is_frozen():
    cloud_event = CloudEvent(data=bytearray(b"abc"))
    assert cloud_event.data == b"abc"
    assert isinstance(cloud_event.data, bytes)
