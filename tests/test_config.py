import dataclasses

import pytest

from speech_gateway import ClientConfig, SpeechClient


def test_url_for_joins_endpoint_and_path_verbatim():
    config = ClientConfig(endpoint_url="https://api.example.com", gateway_token="tok")

    assert config.url_for("/speechRecognition/v1/link") == "https://api.example.com/speechRecognition/v1/link"


def test_values_are_stored_without_validation():
    client = SpeechClient("not a url", "")

    assert client.config == ClientConfig(endpoint_url="not a url", gateway_token="")
    client.close()


def test_config_is_immutable():
    config = ClientConfig(endpoint_url="https://api.example.com", gateway_token="tok")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.gateway_token = "other"


def test_tracking_url_percent_encodes_reserved_characters():
    config = ClientConfig(endpoint_url="https://api.example.com", gateway_token="tok")

    assert (
        config.tracking_url("a/b?c%d")
        == "https://api.example.com/speechRecognition/v1/trackingText/a%2Fb%3Fc%25d"
    )


def test_auth_headers_carry_gateway_token():
    config = ClientConfig(endpoint_url="https://api.example.com", gateway_token="tok123")

    assert config.auth_headers() == {"gateway-token": "tok123"}
