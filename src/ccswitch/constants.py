"""Literal constants used by ccswitch."""

APP_NAME = "ccswitch"
CLIENT_APP_NAME = "Claude Code"

# Claude Code stores its OAuth login under one service name and its
# Console API key under another.
DEFAULT_PERSONAL_SERVICE_NAME = "Claude Code-credentials"
DEFAULT_API_SERVICE_NAME = "Claude Code"
# Names other client versions have used; swept by the `test` command.
DIAGNOSTIC_SERVICE_NAMES = (
    "Claude Code-credentials",
    "Claude Code",
    "claude-code",
    "anthropic-claude",
    "Claude",
)

DEFAULT_BACKUP_DIR = "~/.claude-code-auth-switcher"
PERSONAL_BACKUP_FILENAME = "personal.txt"
API_BACKUP_FILENAME = "api.txt"
DEFAULT_CONFIG_PATH = f"{DEFAULT_BACKUP_DIR}/config.json"

BACKUP_FILE_MODE = 0o600
BACKUP_DIR_MODE = 0o700

LEGACY_ENVELOPE_FORMAT = "string"

LABEL_PERSONAL_PLAN = "Personal plan"
LABEL_API_BILLING = "API billing"
LABEL_API_BILLING_ORG = "API billing (has organization)"

MASK_HEAD_CHARS = 8
MASK_TAIL_CHARS = 4
# first8...last4 would reveal most of a token this short.
MASK_MIN_LENGTH = 12
MASK_PLACEHOLDER = "***"

COMMAND_SETUP = "setup"
COMMAND_PERSONAL = "personal"
COMMAND_API = "api"
COMMAND_STATUS = "status"
COMMAND_TEST = "test"
COMMAND_ALIASES = {
    "p": COMMAND_PERSONAL,
    "a": COMMAND_API,
}
COMMANDS = (
    COMMAND_SETUP,
    COMMAND_PERSONAL,
    COMMAND_API,
    COMMAND_STATUS,
    COMMAND_TEST,
)
