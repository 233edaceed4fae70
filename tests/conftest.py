import pytest

from up_cloudevent.datamodel import CeInteger, CeString, CloudEvent


def make_request_event(**changes):
    """A valid req.v1 CloudEvent; keyword arguments replace fields."""
    cloud_event = CloudEvent(
        id="id-88",
        source="up://x",
        spec_version="v1",
        type="req.v1",
        data="hfgljhgljhghhhhhhhhhhhhhh",
        attributes={"sink": CeString("1"), "ttl": CeInteger(88)},
    )
    return cloud_event.replace(**changes) if changes else cloud_event


def make_response_event(**changes):
    cloud_event = CloudEvent(
        id="id-89",
        source="up://x",
        spec_version="v1",
        type="res.v1",
        attributes={
            "ttl": CeInteger(1000),
            "sink": CeString("up://client"),
            "data": CeString("payload"),
            "reqid": CeString("id-88"),
            "dataschema": CeString("schema"),
        },
    )
    return cloud_event.replace(**changes) if changes else cloud_event


@pytest.fixture
def request_event():
    return make_request_event()


@pytest.fixture
def response_event():
    return make_response_event()


@pytest.fixture
def bad_request_event():
    """req.v1 CloudEvent whose ttl is a string."""
    return make_request_event(
        data=None,
        attributes={"sink": CeString("1"), "ttl": CeString("88")},
    )


@pytest.fixture
def make_request():
    """Factory for req.v1 CloudEvents with fields replaced."""
    return make_request_event


@pytest.fixture
def make_response():
    return make_response_event
