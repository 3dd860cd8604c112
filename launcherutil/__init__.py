"""Game launcher utilities: checked downloads, path-aware file IO, Java discovery,
platform rules, prompts and command-line helpers."""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "cli_profile",
    "cli_user",
    "errors",
    "fetch",
    "fsio",
    "jre",
    "osutils",
    "platform",
    "prompts",
]