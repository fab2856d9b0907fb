"""
letsencrypt-routeros Constants

Centralized constants for defaults, file names, and RouterOS commands.
"""

from enum import IntEnum

# Configuration files (applied in order, last one wins)
CONFIG_FILE_OPTIONS = [".env", "letsencrypt-routeros.settings"]

# Default SSH Configuration
DEFAULT_ROUTEROS_USER = "admin"
DEFAULT_SSH_OPTIONS = ""

# Default certificate locations (certbot layout)
DEFAULT_CERTIFICATE_TEMPLATE = "/etc/letsencrypt/live/{domain}/cert.pem"
DEFAULT_KEY_TEMPLATE = "/etc/letsencrypt/live/{domain}/privkey.pem"

# Remote naming
REMOTE_CERTIFICATE_TEMPLATE = "{domain}.pem"
REMOTE_KEY_TEMPLATE = "{domain}.key"
STORE_NAME_SUFFIX = "_0"  # RouterOS names the first imported entry <file>_0

# Services
TLS_SERVICES = ["www-ssl", "api-ssl"]
TUNNEL_SERVICES = ["sstp"]
DEFAULT_SERVICES = ["www-ssl", "api-ssl", "sstp"]

# Seconds to wait after an upload before RouterOS sees the file
SETTLE_DELAY_SECONDS = 2

# RouterOS commands
ROUTEROS_PROBE_COMMAND = "/system resource print"
ROUTEROS_REMOVE_CERTIFICATE_COMMAND = "/certificate remove [find name={store_name}]"
ROUTEROS_REMOVE_FILE_COMMAND = "/file remove {filename}"
ROUTEROS_IMPORT_COMMAND = '/certificate import file-name={filename} passphrase=""'
ROUTEROS_BIND_SERVICE_COMMAND = "/ip service set {service} certificate={store_name}"
ROUTEROS_BIND_SSTP_COMMAND = "/interface sstp-server server set certificate={store_name}"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

SSH_HELP_URL = "https://wiki.mikrotik.com/wiki/Use_SSH_to_execute_commands_(DSA_key_login)"


class ExitCode(IntEnum):
    """Process exit codes, one per failure kind."""

    SUCCESS = 0
    CONFIGURATION_ERROR = 1
    CONNECTION_FAILED = 2
    SETUP_FAILED = 3
    CERTIFICATE_UPLOAD_FAILED = 4
    KEY_UPLOAD_FAILED = 5
    CLEANUP_FAILED = 7
    CERTIFICATE_NOT_FOUND = 11
    CERTIFICATE_UNREADABLE = 12
    KEY_NOT_FOUND = 13
    KEY_UNREADABLE = 14
    SERVICE_CONFIGURATION_BASE = 60  # + 1-based service number
    UNKNOWN_SERVICE = 100
    INTERRUPTED = 130
