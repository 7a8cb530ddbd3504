import unittest

from unixtime.client import NtpTimeClient, ClientState, NTP_REQUEST, build_request
from unixtime.tests.fakes import FakeUdpTransport, make_response


class TestNtpRequest(unittest.TestCase):
    def _client(self, **kwargs):
        transport = FakeUdpTransport(**kwargs)
        client = NtpTimeClient(transport, time_server="192.0.2.10")
        return client, transport

    def test_request_packet_header(self):
        self.assertEqual(len(NTP_REQUEST), 48)
        self.assertEqual(NTP_REQUEST[:4], bytes([0xE3, 0x04, 0x06, 0xEC]))
        self.assertEqual(int.from_bytes(NTP_REQUEST[:4], "little"), 0xEC0604E3)
        # LI=0, VN=4, Mode=3
        self.assertEqual(NTP_REQUEST[0] >> 6, 0)
        self.assertEqual((NTP_REQUEST[0] >> 3) & 0x7, 4)
        self.assertEqual(NTP_REQUEST[0] & 0x7, 3)

    def test_build_request_pads_to_packet_size(self):
        self.assertEqual(build_request(b"\x1b"), b"\x1b" + bytes(47))
        self.assertEqual(len(build_request(bytes(60))), 48)

    def test_request_sends_one_packet_to_server(self):
        client, transport = self._client()
        self.assertTrue(client.begin())

        self.assertTrue(client.request_time())

        self.assertEqual(transport.sent, [("192.0.2.10", 123, NTP_REQUEST)])
        self.assertEqual(client.state, ClientState.AWAITING_RESPONSE)

    def test_request_drains_before_sending(self):
        client, transport = self._client()
        client.begin()
        transport.deliver(make_response(0xE0000000))

        client.request_time()

        names = transport.call_names()
        self.assertLess(names.index("discard_incoming"), names.index("begin_send"))
        self.assertEqual(transport.pending, [])

    def test_request_without_begin_touches_nothing(self):
        client, transport = self._client()

        self.assertFalse(client.request_time())

        self.assertEqual(transport.calls, [])
        self.assertEqual(transport.sent, [])
        self.assertEqual(client.state, ClientState.IDLE)

    def test_request_after_failed_open_is_noop(self):
        client, transport = self._client(open_result=False)
        self.assertFalse(client.begin())
        transport.calls.clear()

        self.assertFalse(client.request_time())
        self.assertEqual(transport.calls, [])

    def test_begin_send_failure_aborts(self):
        client, transport = self._client(begin_send_result=False)
        client.begin()

        self.assertFalse(client.request_time())

        self.assertNotIn("write", transport.call_names())
        self.assertEqual(transport.sent, [])
        self.assertEqual(client.state, ClientState.IDLE)

    def test_short_write_aborts_before_finish(self):
        client, transport = self._client(write_limit=20)
        client.begin()

        self.assertFalse(client.request_time())

        self.assertNotIn("finish_send", transport.call_names())
        self.assertEqual(client.state, ClientState.IDLE)

    def test_finish_send_failure_is_not_retried(self):
        client, transport = self._client(finish_send_result=False)
        client.begin()

        self.assertFalse(client.request_time())

        self.assertEqual(transport.call_names().count("begin_send"), 1)
        self.assertEqual(client.state, ClientState.IDLE)

    def test_new_request_abandons_unread_response(self):
        client, transport = self._client()
        client.begin()
        client.request_time()
        transport.deliver(make_response(0xE0000000))
        self.assertTrue(client.poll_response())

        self.assertTrue(client.request_time())

        self.assertEqual(client.state, ClientState.AWAITING_RESPONSE)
        self.assertIsNone(client.poll_and_extract())

    def test_custom_server_port(self):
        transport = FakeUdpTransport()
        client = NtpTimeClient(transport, time_server="127.0.0.1", server_port=11123)
        client.begin()
        client.request_time()
        self.assertEqual(transport.sent[0][:2], ("127.0.0.1", 11123))


if __name__ == "__main__":
    unittest.main()
