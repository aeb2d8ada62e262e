"""Configuration system for DocIndexLib.

This module defines how callers specify an index run: which folder to
start from, how deep to go, which kinds of entry to keep, and how to lay
out the output table.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping

from .core.node import DocumentNode
from .errors import ConfigurationError


class RenderSchema(Enum):
    """Column layout of the output table."""
    DELIMITED = "delimited"   # One joined, per-segment linked path column
    PER_LEVEL = "per-level"   # One column per depth level


@dataclass(frozen=True)
class IndexDefaults:
    """Default invocation parameters.

    Built once and passed explicitly wherever defaults are needed.
    """
    max_depth: int = 5
    path_separator: str = " > "
    output_name: str = "Document Index"
    include_files: bool = True
    include_folders: bool = True
    schema: RenderSchema = RenderSchema.DELIMITED


DEFAULTS = IndexDefaults()


@dataclass
class FilterConfig:
    """Which kinds of entry end up in the index.

    Filtering never prunes the walk: children of an excluded folder are
    still visited and may be included.
    """

    include_files: bool = True
    include_folders: bool = True

    def should_include(self, node: DocumentNode) -> bool:
        """Check if a node should be included based on its kind."""
        if node.is_file():
            return self.include_files
        return self.include_folders


@dataclass
class IndexConfig:
    """Complete configuration for one index run.

    This is the primary way callers specify what they want. The IndexPlan
    validates it before any traversal begins.
    """

    # Starting point: a folder URL or identifier understood by the source
    root: str = ""

    # Depth control
    max_depth: int = DEFAULTS.max_depth

    # Node filtering
    filter: FilterConfig = field(default_factory=FilterConfig)

    # Output
    output_name: str = DEFAULTS.output_name
    path_separator: str = DEFAULTS.path_separator
    schema: RenderSchema = DEFAULTS.schema

    # Error handling
    skip_errors: bool = False  # Continue past unreadable folders vs fail fast

    @property
    def include_files(self) -> bool:
        return self.filter.include_files

    @property
    def include_folders(self) -> bool:
        return self.filter.include_folders

    # Convenience constructors for common configurations

    @classmethod
    def from_defaults(cls, root: str, defaults: IndexDefaults = DEFAULTS) -> 'IndexConfig':
        """Create config for ``root`` with every other value from ``defaults``."""
        return cls(
            root=root,
            max_depth=defaults.max_depth,
            filter=FilterConfig(defaults.include_files, defaults.include_folders),
            output_name=defaults.output_name,
            path_separator=defaults.path_separator,
            schema=defaults.schema,
        )

    @classmethod
    def folders_only(cls, root: str, max_depth: int = DEFAULTS.max_depth) -> 'IndexConfig':
        """Create config that lists the folder structure without files."""
        return cls(root=root, max_depth=max_depth,
                   filter=FilterConfig(include_files=False, include_folders=True))

    @classmethod
    def from_settings(cls,
                      settings: Mapping[str, Any],
                      defaults: IndexDefaults = DEFAULTS) -> 'IndexConfig':
        """Create config from a loaded settings mapping.

        Unknown keys are ignored; missing keys take their default.

        Raises:
            ConfigurationError: If a value is missing or has the wrong type
        """
        config = cls.from_defaults(settings.get('root-folder-url', ""), defaults)
        if 'max-depth' in settings:
            value = settings['max-depth']
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            config.max_depth = value
        if 'output-sheet-name' in settings:
            config.output_name = settings['output-sheet-name']
        if 'path-separator' in settings:
            config.path_separator = settings['path-separator']
        if 'include-files' in settings:
            config.filter.include_files = settings['include-files']
        if 'include-folders' in settings:
            config.filter.include_folders = settings['include-folders']
        if 'schema' in settings:
            config.schema = parse_schema(settings['schema'])

        config.check()
        return config

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.root, str) or not self.root:
            errors.append("root-folder-url must be a non-empty string")

        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            errors.append("max-depth must be an integer")
        elif self.max_depth < 1:
            errors.append("max-depth must be at least 1")

        if not isinstance(self.path_separator, str) or not self.path_separator:
            errors.append("path-separator must be a non-empty string")

        if not isinstance(self.output_name, str) or not self.output_name:
            errors.append("output-sheet-name must be a non-empty string")

        for key, value in (('include-files', self.filter.include_files),
                           ('include-folders', self.filter.include_folders)):
            if not isinstance(value, bool):
                errors.append(f"{key} must be a boolean")

        if not isinstance(self.schema, RenderSchema):
            errors.append("schema must be a RenderSchema")

        return errors

    def check(self) -> None:
        """Raise ConfigurationError for the first validation problem."""
        errors = self.validate()
        if errors:
            key = errors[0].split(' ', 1)[0]
            raise ConfigurationError(key, f"Invalid configuration: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration keyed by settings key."""
        return {
            'root-folder-url': self.root,
            'max-depth': self.max_depth,
            'output-sheet-name': self.output_name,
            'path-separator': self.path_separator,
            'include-files': self.include_files,
            'include-folders': self.include_folders,
            'schema': self.schema.value,
        }


def parse_schema(value: Any) -> RenderSchema:
    """Parse a schema name such as ``"per-level"`` into a RenderSchema."""
    if isinstance(value, RenderSchema):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower().replace('_', '-')
        for schema in RenderSchema:
            if schema.value == normalized:
                return schema
    raise ConfigurationError(
        'schema',
        f"Unknown schema: {value!r}. Choose from: {', '.join(s.value for s in RenderSchema)}"
    )
