import unittest

from unixtime.client import NtpTimeClient, ClientState, Delivery, rounds_up, ntp_to_unix
from unixtime.tests.fakes import FakeUdpTransport, make_response

NTP_SECONDS = 0xE0000000
UNIX_SECONDS = NTP_SECONDS - 2208988800


class TestRounding(unittest.TestCase):
    def test_epoch_conversion(self):
        self.assertEqual(ntp_to_unix(2208988800), 0)
        self.assertEqual(ntp_to_unix(NTP_SECONDS), 1549107584)

    def test_boundary_does_not_round_up(self):
        self.assertFalse(rounds_up(40, 75))
        self.assertTrue(rounds_up(41, 75))
        self.assertFalse(rounds_up(105, 10))
        self.assertTrue(rounds_up(106, 10))

    def test_compensation_per_delivery(self):
        client = NtpTimeClient(FakeUdpTransport(), poll_interval_ms=150)
        self.assertEqual(client.compensation(Delivery.POLLED), 75)
        self.assertEqual(client.compensation(Delivery.NOTIFIED), 10)

    def test_compensation_capped_at_threshold(self):
        client = NtpTimeClient(FakeUdpTransport(), poll_interval_ms=230)
        self.assertEqual(client.compensation(Delivery.POLLED), 115)
        client.poll_interval_ms = 300
        self.assertEqual(client.compensation(Delivery.POLLED), 115)
        self.assertFalse(rounds_up(0, client.compensation(Delivery.POLLED)))
        self.assertTrue(rounds_up(1, client.compensation(Delivery.POLLED)))


class TestExtraction(unittest.TestCase):
    def setUp(self):
        self.transport = FakeUdpTransport()
        self.client = NtpTimeClient(self.transport, time_server="192.0.2.10")
        self.client.begin()
        self.client.request_time()

    def test_polled_response_uses_half_poll_interval(self):
        self.transport.deliver(make_response(NTP_SECONDS, fraction=41))
        self.assertTrue(self.client.poll_response())
        self.assertEqual(self.client.state, ClientState.RESPONSE_READY)

        self.assertEqual(self.client.poll_and_extract(), UNIX_SECONDS + 1)
        self.assertEqual(self.client.state, ClientState.IDLE)

    def test_polled_response_at_threshold_keeps_second(self):
        self.transport.deliver(make_response(NTP_SECONDS, fraction=40))
        self.client.poll_response()
        self.assertEqual(self.client.poll_and_extract(), UNIX_SECONDS)

    def test_notified_response_uses_fixed_compensation(self):
        self.transport.deliver(make_response(NTP_SECONDS, fraction=41))
        self.assertEqual(self.client.poll_and_extract(), UNIX_SECONDS)

    def test_notified_response_above_threshold_rounds_up(self):
        self.transport.deliver(make_response(NTP_SECONDS, fraction=106))
        self.assertEqual(self.client.poll_and_extract(), UNIX_SECONDS + 1)

    def test_full_fraction_rounds_up(self):
        self.transport.deliver(make_response(NTP_SECONDS, fraction=0xFF))
        self.client.poll_response()
        self.assertEqual(self.client.poll_and_extract(), NTP_SECONDS + 1 - 2208988800)

    def test_small_seconds_arithmetic(self):
        self.transport.deliver(make_response(100, fraction=0xFF))
        self.client.poll_response()
        self.assertEqual(self.client.poll_and_extract(), 101 - 2208988800)

    def test_caller_supplied_length(self):
        self.transport.deliver(make_response(NTP_SECONDS, fraction=0))
        length = self.transport.check_incoming()
        self.assertEqual(self.client.poll_and_extract(length), UNIX_SECONDS)

    def test_length_reported_before_datagram_is_loaded(self):
        self.transport.deliver(make_response(NTP_SECONDS, fraction=0))
        calls_before = len(self.transport.calls)

        self.assertIsNone(self.client.poll_and_extract(48))

        self.assertEqual(self.client.state, ClientState.AWAITING_RESPONSE)
        self.assertEqual(len(self.transport.calls), calls_before)
        self.assertEqual(len(self.transport.pending), 1)
        self.assertEqual(self.client.poll_and_extract(), UNIX_SECONDS)

    def test_long_poll_interval_keeps_small_fraction(self):
        self.client.poll_interval_ms = 300
        self.transport.deliver(make_response(NTP_SECONDS, fraction=0))
        self.client.poll_response()
        self.assertEqual(self.client.poll_and_extract(), UNIX_SECONDS)

    def test_remaining_bytes_are_discarded(self):
        self.transport.deliver(make_response(NTP_SECONDS))
        self.client.poll_response()
        self.client.poll_and_extract()
        self.assertEqual(self.transport.remaining, 0)
        self.assertEqual(self.transport.call_names()[-1], "discard_incoming")

    def test_short_datagram_is_rejected(self):
        self.transport.deliver(make_response(NTP_SECONDS, size=47))

        self.assertFalse(self.client.poll_response())
        self.assertEqual(self.client.state, ClientState.AWAITING_RESPONSE)

        self.transport.deliver(make_response(NTP_SECONDS))
        self.assertTrue(self.client.poll_response())
        self.assertEqual(self.client.poll_and_extract(), UNIX_SECONDS)

    def test_oversized_datagram_is_rejected(self):
        self.transport.deliver(make_response(NTP_SECONDS, size=68))
        self.assertIsNone(self.client.poll_and_extract())
        self.assertEqual(self.client.state, ClientState.AWAITING_RESPONSE)

    def test_supplied_wrong_length_reads_nothing(self):
        self.transport.deliver(make_response(NTP_SECONDS))
        self.assertIsNone(self.client.poll_and_extract(length=52))
        self.assertEqual(self.transport.pending, [make_response(NTP_SECONDS)])

    def test_no_datagram(self):
        self.assertIsNone(self.client.poll_and_extract())
        self.assertEqual(self.client.return_unix_time(), 0)

    def test_return_unix_time_sentinel_form(self):
        self.transport.deliver(make_response(NTP_SECONDS, size=20))
        self.assertEqual(self.client.return_unix_time(), 0)

        self.transport.deliver(make_response(NTP_SECONDS))
        self.assertEqual(self.client.return_unix_time(), UNIX_SECONDS)


if __name__ == "__main__":
    unittest.main()
