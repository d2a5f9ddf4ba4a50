"""Shared constants for devdb."""

SERVER_NAME_PREFIX = "devdb"
DEFAULT_USER = "devdb"
DEFAULT_PASSWORD = "devdb"
DEFAULT_DATABASE = "devdb"
DEFAULT_CONFIG_FILE = ".devdb.yml"
ROOT_USER = "root"

DETECTION_LINES = 5

HEALTH_MAX_ATTEMPTS = 12
HEALTH_INTERVAL_SECONDS = 5.0
HEALTHY_STATUS = "healthy"

BUILD_DIR_NAME = "db"
DOCKERFILE_NAME = "Dockerfile"
COMPOSE_FILE_NAME = "docker-compose.yaml"
