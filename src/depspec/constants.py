"""Constants used in the project."""


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for grammar tokens and configuration names; not intended to provide behavior.
    """

    # Platform clause grammar
    PLATFORMS_KEYWORD = "@platforms"
    PLATFORMS_LIST_OPEN = "["
    PLATFORMS_LIST_CLOSE = "]"
    PLATFORMS_LIST_SEPARATOR = ","

    # Version specifier grammar
    VERSION_EXACTLY = "=="
    VERSION_AT_LEAST = ">="
    VERSION_COMPATIBLE_WITH = "~>"
    QUOTE = '"'
    VERSION_CHARACTERS = frozenset(
        "0123456789"
        "abcdefghijklmnopqrstuvwxyz"
        "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        ".-+"
    )
    WHITESPACE = frozenset(" \t\r\n")

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "DEPSPEC_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"
