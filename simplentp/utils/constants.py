# NTP wire constants
NTP_PORT = 123
NTP_TIMEOUT = 10
PACKET_SIZE = 48

# Seconds between 1900-01-01 (NTP era 0) and 1970-01-01
UNIX_TIME_OFFSET = 2208988800

# Header field values used in client requests
CLIENT_LEAP = 0
CLIENT_VERSION = 3
CLIENT_MODE = 3

MAX_PORT = 65535
