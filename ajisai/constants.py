from typing import Final


URI_SCHEME: Final[str] = "ajisai"

DEFAULT_PRESET_NAME: Final[str] = "default"
DEFAULT_NAMESPACE: Final[str] = "ajisai"
DEFAULT_CACHE_DIR: Final[str] = "./.cache/ajisai"

CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    "ajisai.yml",
    "ajisai.yaml",
    "ajisai.json",
)

RULE_INTERNAL_EXTENSION: Final[str] = ".md"
PROMPT_INTERNAL_EXTENSION: Final[str] = ".md"

DEFAULT_RULE_EXPORTS: Final[tuple[str, ...]] = ("rules/**/*.md",)
DEFAULT_PROMPT_EXPORTS: Final[tuple[str, ...]] = ("prompts/**/*.md",)

GITIGNORE_FILENAME: Final[str] = ".gitignore"
GITIGNORE_CONTENT: Final[str] = "*\n"

OUTPUT_FILE_MODE: Final[int] = 0o600
OUTPUT_DIR_MODE: Final[int] = 0o750
