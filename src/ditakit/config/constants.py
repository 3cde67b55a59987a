"""Constants for ditakit."""

# Application constants
APP_NAME = "ditakit"

# Default paths
DEFAULT_LOG_DIR = ".logs"
DEFAULT_CONFIG_FILE = "ditakit.yaml"

# Working directory fallbacks, created under <system tmp>/ditakit/
TEMP_NAMESPACE = APP_NAME
INSTALL_DIR_FALLBACK = "dita-ot"
OUTPUT_DIR_FALLBACK = "dita-output"
TEMP_DIR_FALLBACK = "dita-temp"

# Toolchain installation
INSTALLED_MARKER = "config"
# Later files override earlier ones; the integrator writes plugin.properties
TOOLCHAIN_CONFIGURATION_FILES = (
    "config/configuration.properties",
    "config/org.dita.dost.platform/plugin.properties",
)
TRANSTYPES_KEY = "transtypes"
BUNDLED_ARCHIVE = "dita-ot.zip"
RESOURCE_PACKAGE = "ditakit.resources"

# Environment variables that tie a child process to the host runtime
HOST_RESOLUTION_VARS = (
    "PYTHONPATH",
    "PYTHONHOME",
    "CLASSPATH",
    "JAVA_TOOL_OPTIONS",
    "_JAVA_OPTIONS",
)

# Topic type URIs
PROCESSOR_START = "dita.processor_start"
SEQUENCE = "dita.sequence"
ROLE_PROCESSOR = "dita.processor"
ROLE_START = "dita.start"
ROLE_PREDECESSOR = "dita.predecessor"
ROLE_SUCCESSOR = "dita.successor"
DITA_OUTPUT_FORMAT = "dita.output_format"
DITA_BODY = "dita.body"

# Intermediate document
MAP_SUFFIX = ".xml"
TOPIC_SUFFIX = ".dita"
