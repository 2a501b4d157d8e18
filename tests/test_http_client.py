"""Tests for the shared JSON request helper."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from common.http_client import RegistryRequestError, request_json
from constants import Constants


def _response(status_code=200, text="{}"):
    res = MagicMock()
    res.status_code = status_code
    res.text = text
    return res


class TestRequestJson:
    """Test request_json success and failure mapping."""

    @patch('common.http_client.requests.request')
    def test_returns_decoded_json(self, mock_request):
        mock_request.return_value = _response(200, '{"results": ["a/1@_/_"]}')

        result = request_json("https://conan.example.com/x", "GET", {"Accept": "application/json"})

        assert result == {"results": ["a/1@_/_"]}
        mock_request.assert_called_once_with(
            "GET",
            "https://conan.example.com/x",
            headers={"Accept": "application/json"},
            timeout=Constants.REQUEST_TIMEOUT,
        )

    @patch('common.http_client.requests.request')
    def test_single_attempt_only(self, mock_request):
        mock_request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(RegistryRequestError):
            request_json("https://conan.example.com/x")

        assert mock_request.call_count == 1

    @patch('common.http_client.requests.request')
    def test_non_2xx_raises_with_status(self, mock_request):
        mock_request.return_value = _response(404, "not found")

        with pytest.raises(RegistryRequestError) as excinfo:
            request_json("https://conan.example.com/x")

        assert excinfo.value.status_code == 404
        assert "HTTP 404" in str(excinfo.value)

    @patch('common.http_client.requests.request')
    def test_timeout_raises(self, mock_request):
        mock_request.side_effect = requests.Timeout("slow")

        with pytest.raises(RegistryRequestError) as excinfo:
            request_json("https://conan.example.com/x")

        assert excinfo.value.status_code is None

    @patch('common.http_client.requests.request')
    def test_invalid_json_raises(self, mock_request):
        mock_request.return_value = _response(200, "<html>")

        with pytest.raises(RegistryRequestError):
            request_json("https://conan.example.com/x")
