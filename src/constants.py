"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    RESOLUTION_ERROR = 3
    CONFIG_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Conan v2 REST API on a JFrog Artifactory instance
    CONAN_API_PATH = "artifactory/api/conan"
    CONAN_UI_PATH = "ui/native"
    CONAN_API_KIND = "conans"
    DEFAULT_NAMESPACE = "_"
    DEFAULT_REMOTE = "repo"

    MANIFEST_FILE = "conandata.yml"
    LOCK_FILE = "conan.win.lock"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HEADERS_JSON = {"Content-Type": "application/json", "Accept": "application/json"}

    # Configuration sources
    ENV_LOG_LEVEL = "CONANBUMP_LOG_LEVEL"
    ENV_REMOTE_BASE_URL = "CONAN_REMOTE_BASE_URL"
    ENV_REMOTE_REPO = "CONAN_REMOTE_REPO"
    LOCAL_CONFIG_PATH = ".conanbump/config.yaml"
    GLOBAL_CONFIG_DIR = "conanbump"
    GLOBAL_CONFIG_FILE = "config.yaml"
