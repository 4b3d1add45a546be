"""Default config location and the template written by create_default_config()."""

DEFAULT_CONFIG_DIR = "~/.dotdash"
DEFAULT_CONFIG_FILE = "config.yaml"
CONFIG_PATH_ENV = "DOTDASH_CONFIG"

DEFAULT_CONFIG_YAML = """\
# dotdash service configuration
# Environment variables (DOTDASH_ENV, HOST, PORT, MORSE_SERVICE_URL,
# LOG_LEVEL, CORS_ORIGINS) override values in this file.

environment: development

server:
  host: 0.0.0.0
  port: 3007
  service_url: http://localhost:3007
  workers: 1

logging:
  level: info

cors:
  allow_origins:
    - "*"
"""
