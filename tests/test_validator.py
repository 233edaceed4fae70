import logging
import threading

import pytest

from up_cloudevent.datamodel import (
    AttrCase,
    CeBoolean,
    CeInteger,
    CeString,
    CeUnset,
    CloudEvent,
    ServiceTypeRegistry,
    SpecVersion,
    SpecVersionRegistry,
    UMessageType,
)
from up_cloudevent.errors import ValidationError
from up_cloudevent.validate import (
    DEFAULT_MANDATORY_ATTRIBUTES,
    CloudEventValidator,
    MandatoryAttributeRule,
    is_valid_event,
)
import up_cloudevent.validate.validator as validator_module


@pytest.fixture
def validator():
    return CloudEventValidator()


def test_valid_request(validator, request_event):
    assert validator.is_valid_event(request_event)
    assert is_valid_event(request_event)


def test_valid_response(validator, response_event):
    assert validator.is_valid_event(response_event)


@pytest.mark.parametrize("kind", ["pub.v1", "file.v1"])
def test_publish_and_file_need_no_attributes(validator, kind):
    cloud_event = CloudEvent(id="1", source="up://x", spec_version="v1", type=kind)
    assert validator.is_valid_event(cloud_event)


def test_ttl_as_string_is_rejected(validator, bad_request_event):
    result = validator.validate(bad_request_event)
    assert not result.valid
    assert result.error is ValidationError.ATTRIBUTE_TYPE_MISMATCH
    assert result.attribute == "ttl"
    assert result.expected is AttrCase.INTEGER
    assert result.actual is AttrCase.STRING
    assert "ttl" in result.message
    assert "INTEGER" in result.message


def test_empty_event_fails_on_header(validator):
    result = validator.validate(CloudEvent())
    assert result.error is ValidationError.MISSING_MANDATORY_FIELD
    assert not result


@pytest.mark.parametrize("name", ["id", "source", "spec_version", "type"])
def test_each_header_field_is_mandatory(validator, make_request, name):
    result = validator.validate(make_request(**{name: ""}))
    assert result.error is ValidationError.MISSING_MANDATORY_FIELD
    assert name in result.message


def test_unknown_kind(validator, make_request):
    result = validator.validate(make_request(type="req.v2"))
    assert result.error is ValidationError.UNSUPPORTED_KIND


def test_unknown_spec_version(validator, make_request):
    result = validator.validate(make_request(spec_version="1.0"))
    assert result.error is ValidationError.UNSUPPORTED_SPEC_VERSION


def test_kind_checked_before_spec_version(validator, make_request):
    result = validator.validate(make_request(type="nope", spec_version="nope"))
    assert result.error is ValidationError.UNSUPPORTED_KIND


def test_header_checked_before_kind(validator, make_request):
    result = validator.validate(make_request(id="", type="nope"))
    assert result.error is ValidationError.MISSING_MANDATORY_FIELD


def test_missing_attribute(validator, make_request):
    result = validator.validate(make_request(attributes={"ttl": CeInteger(88)}))
    assert result.error is ValidationError.MISSING_ATTRIBUTE
    assert result.attribute == "sink"
    assert result.expected is AttrCase.STRING


def test_rules_checked_in_table_order(validator, make_request):
    result = validator.validate(make_request(attributes={}))
    assert result.attribute == "ttl"


def test_unset_value_does_not_satisfy_rule(validator, make_request):
    result = validator.validate(
        make_request(attributes={"ttl": CeUnset(), "sink": CeString("1")})
    )
    assert result.error is ValidationError.ATTRIBUTE_TYPE_MISMATCH
    assert result.actual is AttrCase.ATTR_NOT_SET


@pytest.mark.parametrize(
    "missing", ["ttl", "sink", "data", "reqid", "dataschema"]
)
def test_response_requires_each_attribute(validator, response_event, missing):
    result = validator.validate(response_event.without_attribute(missing))
    assert result.error is ValidationError.MISSING_ATTRIBUTE
    assert result.attribute == missing


def test_extra_attributes_never_fix_failure(validator, bad_request_event):
    padded = bad_request_event.with_attribute("extra", CeBoolean(True)).with_attribute(
        "ttl2", CeInteger(88)
    )
    assert not validator.is_valid_event(padded)


def test_fixing_the_failure_makes_it_pass(validator, bad_request_event):
    fixed = bad_request_event.with_attribute("ttl", CeInteger(88))
    assert validator.is_valid_event(fixed)


def test_fixing_one_of_two_failures_still_fails(validator, bad_request_event):
    broken_twice = bad_request_event.replace(spec_version="v9")
    fixed_once = broken_twice.with_attribute("ttl", CeInteger(88))
    assert not validator.is_valid_event(fixed_once)


def test_validation_is_idempotent(validator, request_event, bad_request_event):
    assert validator.validate(request_event) == validator.validate(request_event)
    assert validator.validate(bad_request_event) == validator.validate(bad_request_event)


def test_validation_does_not_mutate(validator, bad_request_event):
    before = bad_request_event.replace()
    validator.validate(bad_request_event)
    assert bad_request_event == before


def test_concurrent_validation(validator, request_event, bad_request_event):
    results = []

    def worker():
        for _ in range(200):
            results.append(validator.is_valid_event(request_event))
            results.append(not validator.is_valid_event(bad_request_event))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(results)
    assert len(results) == 4 * 400


def test_diagnostics_are_logged(bad_request_event, caplog):
    validator = CloudEventValidator()
    with caplog.at_level(logging.INFO, logger="up_cloudevent.validate.validator"):
        validator.is_valid_event(bad_request_event)
    assert "ttl" in caplog.text
    assert "INTEGER" in caplog.text


def test_default_logger_is_module_logger():
    assert CloudEventValidator().logger is validator_module.logger


def test_injected_logger(bad_request_event, caplog):
    custom = logging.getLogger("tests.custom_sink")
    validator = CloudEventValidator(logger=custom)
    with caplog.at_level(logging.INFO, logger="tests.custom_sink"):
        assert not validator.is_valid_event(bad_request_event)
    assert any(record.name == "tests.custom_sink" for record in caplog.records)


def test_disabled_logging_does_not_change_outcome(request_event, bad_request_event):
    silent = logging.getLogger("tests.silent")
    silent.disabled = True
    validator = CloudEventValidator(logger=silent)
    assert validator.is_valid_event(request_event)
    assert not validator.is_valid_event(bad_request_event)


def test_custom_rule_table(make_request):
    validator = CloudEventValidator(
        rules={
            UMessageType.UMESSAGE_TYPE_REQUEST: [
                MandatoryAttributeRule("token", AttrCase.STRING),
            ],
        }
    )
    cloud_event = make_request(attributes={"token": CeString("abc")})
    assert validator.is_valid_event(cloud_event)
    assert not CloudEventValidator().is_valid_event(cloud_event)


def test_custom_registries(make_request):
    validator = CloudEventValidator(
        service_types=ServiceTypeRegistry({"req.v2": UMessageType.UMESSAGE_TYPE_REQUEST}),
        spec_versions=SpecVersionRegistry({"1.0": SpecVersion.V1}),
    )
    assert validator.is_valid_event(make_request(type="req.v2", spec_version="1.0"))
    assert not validator.is_valid_event(make_request())


def test_default_rule_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_MANDATORY_ATTRIBUTES[UMessageType.UMESSAGE_TYPE_PUBLISH] = ()
    request_rules = DEFAULT_MANDATORY_ATTRIBUTES[UMessageType.UMESSAGE_TYPE_REQUEST]
    assert request_rules == (
        MandatoryAttributeRule("ttl", AttrCase.INTEGER),
        MandatoryAttributeRule("sink", AttrCase.STRING),
    )
