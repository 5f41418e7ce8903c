"""Validation of dispatch requests."""

import pytest

from app.domain.entities import DispatchRequest
from app.domain.exceptions import ValidationError


def test_defaults_send_email_and_push_only() -> None:
    request = DispatchRequest(release_id=7)

    assert request.send_email is True
    assert request.send_sms is False
    assert request.send_push is True
    assert request.categories == frozenset()
    assert request.custom_message is None


def test_tags_are_trimmed_and_blank_values_dropped() -> None:
    request = DispatchRequest(release_id=1, categories=[" luxury ", "", "swiss"], brands=("  ",))

    assert request.categories == frozenset({"luxury", "swiss"})
    assert request.brands == frozenset()


def test_blank_custom_message_becomes_none() -> None:
    assert DispatchRequest(release_id=1, custom_message="   ").custom_message is None
    assert DispatchRequest(release_id=1, custom_message=" hi ").custom_message == "hi"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"release_id": 0},
        {"release_id": -3},
        {"release_id": "1"},
        {"release_id": True},
        {"release_id": 1, "categories": "luxury"},
        {"release_id": 1, "brands": [1, 2]},
        {"release_id": 1, "send_sms": "yes"},
        {"release_id": 1, "custom_message": 42},
    ],
)
def test_malformed_requests_are_rejected(kwargs) -> None:
    with pytest.raises(ValidationError):
        DispatchRequest(**kwargs)
