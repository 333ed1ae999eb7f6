"""Unit tests for the TVDBHttpClient class."""

import unittest
from unittest.mock import patch, MagicMock, call

import requests

from tvdb_client import TVDBHttpClient
from tvdb_client.xml_parser import parse_records

HTTP_CLIENT_MODULE_PATH = 'tvdb_client.http_client'


# noinspection HttpUrlsUsage
class TestTVDBHttpClient(unittest.TestCase):
    """Unit tests for the TVDBHttpClient class."""

    @patch(f'{HTTP_CLIENT_MODULE_PATH}.requests.Session')
    @patch(f'{HTTP_CLIENT_MODULE_PATH}.HTTPAdapter')
    @patch(f'{HTTP_CLIENT_MODULE_PATH}.Retry')
    def setUp(self, mock_retry, mock_http_adapter, mock_session):
        """Set up test environment before each test method."""
        self.mock_logger = MagicMock(name='logger_mock')
        self.mock_retry_cls = mock_retry
        self.mock_adapter_cls = mock_http_adapter
        self.mock_session_cls = mock_session
        self.mock_session_instance = MagicMock()
        self.mock_session_cls.return_value = self.mock_session_instance
        self.mock_adapter_instance = MagicMock()
        self.mock_adapter_cls.return_value = self.mock_adapter_instance
        self.mock_retry_instance = MagicMock()
        self.mock_retry_cls.return_value = self.mock_retry_instance
        self.client = TVDBHttpClient(timeout=5, logger=self.mock_logger)

    def test_init(self):
        self.mock_retry_cls.assert_called_once_with(total=0, raise_on_status=False)
        self.mock_adapter_cls.assert_called_once_with(
            pool_connections=10, pool_maxsize=10, max_retries=self.mock_retry_instance
        )
        self.mock_session_cls.assert_called_once()
        expected_mount_calls = [call("https://", self.mock_adapter_instance),
                                call("http://", self.mock_adapter_instance)]
        self.mock_session_instance.mount.assert_has_calls(expected_mount_calls, any_order=True)
        self.assertEqual(self.client.timeout, 5)

    def test_get_success(self):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.content = b'<Data/>'
        self.mock_session_instance.get.return_value = mock_response

        result = self.client.get('http://mockapi.test/api/GetSeries.php?seriesname=x')

        self.assertEqual(result, b'<Data/>')
        self.mock_session_instance.get.assert_called_once_with(
            'http://mockapi.test/api/GetSeries.php?seriesname=x', timeout=5
        )
        self.mock_logger.debug.assert_called_once_with(
            "Making API request: GET http://mockapi.test/api/GetSeries.php?seriesname=x"
        )

    def test_get_non_200(self):
        mock_response = MagicMock()
        mock_response.status_code = 503
        self.mock_session_instance.get.return_value = mock_response

        self.assertIsNone(self.client.get('http://mockapi.test/error'))
        self.mock_logger.debug.assert_any_call("GET http://mockapi.test/error returned HTTP 503")

    def test_get_request_exception(self):
        self.mock_session_instance.get.side_effect = requests.exceptions.Timeout("Timeout")

        self.assertIsNone(self.client.get('http://mockapi.test/timeout'))
        self.mock_logger.debug.assert_any_call("GET http://mockapi.test/timeout failed: Timeout")

    def test_get_other_exception_propagates(self):
        self.mock_session_instance.get.side_effect = RuntimeError("boom")
        with self.assertRaises(RuntimeError):
            self.client.get('http://mockapi.test/boom')

    def test_injected_session(self):
        session = MagicMock()
        client = TVDBHttpClient(session=session, logger=self.mock_logger)
        self.assertIs(client.session, session)
        client.close()
        session.close.assert_called_once()


class TestNonAsciiBodies(unittest.TestCase):
    """Bodies go from a real requests.Response through get() into the XML parser."""

    def _client_returning(self, body, content_type):
        response = requests.models.Response()
        response.status_code = 200
        response._content = body
        response.headers['Content-Type'] = content_type
        session = MagicMock()
        session.get.return_value = response
        return TVDBHttpClient(session=session, logger=MagicMock(name='logger_mock'))

    def test_utf8_body_without_charset(self):
        body = ('<?xml version="1.0" encoding="UTF-8" ?>'
                '<Data><Series><SeriesName>Café Überfall</SeriesName></Series></Data>').encode('utf-8')
        client = self._client_returning(body, 'text/xml')

        result = client.get('http://mockapi.test/api/GetSeries.php?seriesname=cafe')

        self.assertIsInstance(result, bytes)
        self.assertEqual(parse_records(result, 'Series'), [{'SeriesName': 'Café Überfall'}])

    def test_latin1_body_with_declaration(self):
        body = ('<?xml version="1.0" encoding="ISO-8859-1" ?>'
                '<Data><Series><SeriesName>Café</SeriesName></Series></Data>').encode('iso-8859-1')
        client = self._client_returning(body, 'text/xml; charset=ISO-8859-1')

        result = client.get('http://mockapi.test/api/GetSeries.php?seriesname=cafe')

        self.assertEqual(parse_records(result, 'Series'), [{'SeriesName': 'Café'}])


if __name__ == '__main__':
    unittest.main()
