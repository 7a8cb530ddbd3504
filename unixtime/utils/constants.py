NTP_PORT = 123
NTP_PACKET_SIZE = 48

# Seconds between 1900-01-01 (NTP epoch) and 1970-01-01 (Unix epoch)
NTP_UNIX_DELTA = 2208988800

# Byte offset of the transmit timestamp seconds in a server response
TRANSMIT_TIMESTAMP_OFFSET = 40

# (0.5 - 0.05) * 256: half a second minus an assumed 50ms network delay,
# expressed in units of the most significant fractional byte
ROUNDING_THRESHOLD = 115

# Fractional-byte compensation when the caller reads right after being notified
NOTIFIED_COMPENSATION = 10

DEFAULT_POLL_INTERVAL_MS = 150
# Half of it must stay within ROUNDING_THRESHOLD
MAX_POLL_INTERVAL_MS = 2 * ROUNDING_THRESHOLD
DEFAULT_MAX_POLLS = 15
DEFAULT_TIME_SERVER = "pool.ntp.org"

# LI=0 VN=4 Mode=3, stratum 4, poll 6, precision -20, stored little-endian
NTP_REQUEST_HEADER = 0xEC0604E3
