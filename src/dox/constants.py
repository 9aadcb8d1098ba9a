"""Constants for dox CLI."""

# Subprocess timeouts (seconds)
GIT_TIMEOUT = 120
DOCFX_TIMEOUT = 1800  # 30 minutes for full site builds

# HTTP probes (seconds)
PROBE_TIMEOUT = 2
ONLINE_CHECK_TIMEOUT = 3
HOST_READY_TIMEOUT = 60
HOST_POLL_INTERVAL = 1.0

# Status used when a probe never got an HTTP response
NETWORK_FAILURE_STATUS = 502

LOCAL_PORT = 8080

CONFIG_FILE = "dox.toml"
FRONT_MATTER = "---\n_disableContribution: true\n---\n"
