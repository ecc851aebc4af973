"""Tests for the main entry point and run wiring."""

import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from minutes_downloader.exceptions import FeedFetchError
from minutes_downloader.main import main
from test_utils import (
    FEED_URL,
    UPLOADS,
    FakeTransport,
    attachment_link,
    generate_test_feed,
    generate_test_item,
)


@patch.dict(os.environ, {}, clear=True)
@patch("minutes_downloader.main.load_dotenv")
@patch("minutes_downloader.main.HttpTransport")
class TestMain(unittest.TestCase):
    """Test main() exit codes and side effects."""

    def setUp(self):
        """Create a temporary output directory."""
        self.test_dir = tempfile.mkdtemp(prefix="minutes_downloader_main_")
        self.output_dir = os.path.join(self.test_dir, "minutes")

    def tearDown(self):
        """Remove the temporary directory."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def use_transport(self, mock_transport_cls, transport):
        mock_transport_cls.return_value.__enter__.return_value = transport
        mock_transport_cls.return_value.__exit__.return_value = False

    def test_success(self, mock_transport_cls, mock_load_dotenv):
        """A successful run creates the output directory and returns 0."""
        transport = FakeTransport(
            feed=generate_test_feed(
                [generate_test_item(content=attachment_link("2006", "01", "jan-minutes"))]
            ),
            attachments={f"{UPLOADS}/2006/01/jan-minutes.pdf": b"%PDF-1.4"},
        )
        self.use_transport(mock_transport_cls, transport)

        exit_code = main(["-o", self.output_dir, "-t", "7"])

        self.assertEqual(exit_code, 0)
        mock_load_dotenv.assert_called_once()
        mock_transport_cls.assert_called_once_with(timeout=7.0)
        self.assertEqual(transport.requested[0], FEED_URL)
        self.assertEqual(os.listdir(self.output_dir), ["200612-1545"])

    def test_per_entry_failure_still_succeeds(self, mock_transport_cls, mock_load_dotenv):
        """Attachment failures are not fatal."""
        transport = FakeTransport(
            feed=generate_test_feed(
                [generate_test_item(content=attachment_link("2006", "01", "jan-minutes"))]
            ),
        )
        self.use_transport(mock_transport_cls, transport)

        self.assertEqual(main(["-o", self.output_dir]), 0)
        self.assertEqual(os.listdir(self.output_dir), [])

    def test_feed_fetch_failure(self, mock_transport_cls, mock_load_dotenv):
        """A feed that cannot be fetched ends the run with 1."""
        transport = FakeTransport(feed=FeedFetchError(FEED_URL, "Code: 500", 500))
        self.use_transport(mock_transport_cls, transport)

        self.assertEqual(main(["-o", self.output_dir]), 1)
        self.assertFalse(os.path.exists(self.output_dir))

    def test_malformed_feed(self, mock_transport_cls, mock_load_dotenv):
        """A malformed feed ends the run with 1 and writes nothing."""
        transport = FakeTransport(feed=b"<rss><channel><item><title>Minu")
        self.use_transport(mock_transport_cls, transport)

        self.assertEqual(main(["-o", self.output_dir]), 1)
        self.assertFalse(os.path.exists(self.output_dir))
        self.assertEqual(transport.requested, [FEED_URL])

    def test_configuration_error(self, mock_transport_cls, mock_load_dotenv):
        """Invalid settings end the run with 1 before any request."""
        with patch.dict(os.environ, {"MINUTES_ZERO_PAD": "sometimes"}):
            self.assertEqual(main([]), 1)
        mock_transport_cls.assert_not_called()


if __name__ == "__main__":
    unittest.main()
