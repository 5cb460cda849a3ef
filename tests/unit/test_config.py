"""Tests for configuration partitioning and option presence checks."""

import pytest

from service_client_core.config import (
    TRANSPORT_CONFIG_KEYS,
    configuration_empty,
    configuration_exists,
    partition_config,
)


@pytest.mark.unit
def test_partition_empty_config():
    """Test an empty or missing config yields two empty dicts."""
    assert partition_config({}) == ({}, {})
    assert partition_config(None) == ({}, {})


@pytest.mark.unit
def test_partition_splits_transport_keys():
    """Test allow-listed keys go to transport options and the rest to client options."""
    config = {
        "base_url": "https://api.example.com",
        "handler": object(),
        "authType": "oauth2",
        "debug": True,
        "somethingElse": 1,
    }

    transport_options, client_options = partition_config(config)

    assert set(transport_options) == {"base_url", "handler"}
    assert set(client_options) == {"authType", "debug", "somethingElse"}
    assert transport_options["handler"] is config["handler"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "config",
    [
        {},
        {"base_url": "x"},
        {"authType": "oauth2"},
        dict.fromkeys(TRANSPORT_CONFIG_KEYS, None),
        {"defaults": {}, "emitter": None, "apiDescription": "", "debug": False, "other": [1]},
    ],
)
def test_partition_is_disjoint_and_complete(config):
    """Test the two projections are disjoint and cover every input key."""
    transport_options, client_options = partition_config(config)

    assert not set(transport_options) & set(client_options)
    assert set(transport_options) | set(client_options) == set(config)


@pytest.mark.unit
def test_partition_extracts_falsy_transport_values():
    """Test only key presence matters for transport options."""
    transport_options, client_options = partition_config({"defaults": {}, "base_url": ""})

    assert transport_options == {"defaults": {}, "base_url": ""}
    assert client_options == {}


@pytest.mark.unit
def test_partition_does_not_mutate_input():
    config = {"base_url": "x", "authType": "y"}

    partition_config(config)

    assert config == {"base_url": "x", "authType": "y"}


@pytest.mark.unit
def test_configuration_exists_for_truthy_value():
    assert configuration_exists({"authType": "oauth2"}, "authType")
    assert configuration_exists({"debug": True}, "debug")


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, "", False, 0, [], {}])
def test_configuration_exists_treats_falsy_as_unset(value):
    """Test every falsy value counts as not configured."""
    assert not configuration_exists({"authType": value}, "authType")
    assert configuration_empty({"authType": value}, "authType")


@pytest.mark.unit
def test_configuration_exists_for_missing_key():
    assert not configuration_exists({}, "authType")
    assert configuration_empty({"other": "x"}, "authType")
