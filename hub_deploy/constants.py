"""Global constants for hub-deploy"""

import re

APP_NAME = "hub-deploy"

# Logging
LOG_FORMAT = "%(message)s"

# Deployment target defaults
DEFAULT_PROJECT_ID = "hub-chat-prod"
DEFAULT_REGION = "us-central1"
DEFAULT_SERVICE_NAME = "openwebui"
DEFAULT_REGISTRY = f"{DEFAULT_REGION}-docker.pkg.dev/{DEFAULT_PROJECT_ID}/containers/open-webui"
DEFAULT_CUSTOM_URL = "https://chat.hub.inc"

# Build defaults
DEFAULT_TAG_PREFIX = "hub-chat"
DEFAULT_PLATFORM = "linux/amd64"
DEFAULT_BUILD_CONTEXT = "."
DEFAULT_CLOUDBUILD_CONFIG = "cloudbuild.yaml"
SLIM_BUILD_ARG = "USE_SLIM=true"

# Verification
DEFAULT_PROBE_TIMEOUT = 10.0  # seconds
HEALTHY_STATUS_CODES = (200, 302)

# Project config file
PROJECT_CONFIG_FILE = ".hub-deploy.yaml"

# External tools
DOCKER_BIN = "docker"
GCLOUD_BIN = "gcloud"
DOCKER_CREDENTIAL_HELPER = "docker-credential-gcloud"

# Stage names
STAGE_PREREQUISITES = "prerequisites"
STAGE_BUILD = "build"
STAGE_DEPLOY = "deploy"
STAGE_VERIFY = "verify"

# Exit codes
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


# Error codes
class ErrorCode:
    CONFIG_ERROR = "HD001"
    PREREQUISITE_FAILED = "HD002"
    ARTIFACT_MISSING = "HD003"
    EXTERNAL_COMMAND_FAILED = "HD004"


# Environment variables
ENV_CONFIG_PATH = "HUB_DEPLOY_CONFIG"
ENV_PROJECT_ID = "HUB_DEPLOY_PROJECT"
ENV_REGION = "HUB_DEPLOY_REGION"
ENV_SERVICE_NAME = "HUB_DEPLOY_SERVICE"
ENV_REGISTRY = "HUB_DEPLOY_REGISTRY"

# Validation patterns
# Docker tag grammar: up to 128 chars, no leading '.' or '-'
TAG_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_WARNING = "⚠"

# Messages templates
MSG_PREREQUISITES_OK = f"{EMOJI_SUCCESS} Prerequisites OK"
MSG_IMAGE_PUSHED = f"{EMOJI_SUCCESS} Image built and pushed"
MSG_IMAGE_EXISTS = f"{EMOJI_SUCCESS} Image exists in registry"
MSG_REMOTE_BUILD_DONE = f"{EMOJI_SUCCESS} Cloud Build finished (image built, pushed and deployed)"
MSG_DEPLOYED = f"{EMOJI_SUCCESS} Deployed to Cloud Run"
MSG_SERVICE_RESPONDING = f"{EMOJI_SUCCESS} Service is responding"
MSG_SERVICE_STARTING = f"{EMOJI_WARNING} Service may still be starting up"
MSG_DRY_RUN_PROBE = "GET <service URL> (healthy on HTTP 200 or 302)"
