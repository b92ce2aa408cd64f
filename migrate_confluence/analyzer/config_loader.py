"""YAML configuration loading and validation for the analyzer.

Every field is optional; missing fields keep the AnalyzerConfig defaults.

Configuration file structure:
    general_space_key: GENERAL
    metadata_filename: entities.xml
    attachments_dir: attachments
    latest_version_marker: __LATEST__
    max_title_length: 255
    max_extension_length: 10
    content_type_extensions:
      application/gliffy+json: json
      application/gliffy+xml: xml
"""

from typing import Any, Dict

import yaml

from .errors import ConfigError, ConfigFilesystemError
from .models import AnalyzerConfig, default_content_type_extensions


class ConfigLoader:
    """Handles analyzer configuration file loading and validation.

    Entries of content_type_extensions are merged over the built-in ones,
    so a configuration can add content types without repeating the defaults.
    """

    STRING_FIELDS = (
        'general_space_key',
        'metadata_filename',
        'attachments_dir',
        'latest_version_marker',
    )

    # Fields that must not be empty strings
    NON_EMPTY_FIELDS = {'metadata_filename', 'attachments_dir', 'latest_version_marker'}

    INTEGER_FIELDS = ('max_title_length', 'max_extension_length')

    KNOWN_FIELDS = set(STRING_FIELDS) | set(INTEGER_FIELDS) | {'content_type_extensions'}

    @classmethod
    def load(cls, config_path: str) -> AnalyzerConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            AnalyzerConfig with parsed configuration

        Raises:
            ConfigFilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # An empty file means "all defaults"
        if config_dict is None:
            return AnalyzerConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls.parse(config_dict)

    @classmethod
    def parse(cls, config_dict: Dict[str, Any]) -> AnalyzerConfig:
        """Parse and validate a configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary

        Returns:
            Validated AnalyzerConfig

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown_fields = set(config_dict.keys()) - cls.KNOWN_FIELDS
        if unknown_fields:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(f) for f in unknown_fields))}"
            )

        config = AnalyzerConfig()

        for name in cls.STRING_FIELDS:
            if name not in config_dict:
                continue
            value = config_dict[name]
            if value is None:
                value = ''
            if not isinstance(value, str):
                raise ConfigError(
                    f"Field must be a string, got {type(value).__name__}",
                    name
                )
            if name in cls.NON_EMPTY_FIELDS and not value.strip():
                raise ConfigError("Field cannot be empty", name)
            setattr(config, name, value)

        for name in cls.INTEGER_FIELDS:
            if name not in config_dict:
                continue
            value = config_dict[name]
            # bool is an int subclass, but "true" is never a meaningful length
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(
                    f"Field must be an integer, got {type(value).__name__}",
                    name
                )
            if value < 1:
                raise ConfigError(
                    f"Field must be at least 1, got {value}",
                    name
                )
            setattr(config, name, value)

        if 'content_type_extensions' in config_dict:
            config.content_type_extensions = cls._parse_extensions(
                config_dict['content_type_extensions']
            )

        return config

    @classmethod
    def _parse_extensions(cls, raw: Any) -> Dict[str, str]:
        extensions = default_content_type_extensions()
        if raw is None:
            return extensions

        if not isinstance(raw, dict):
            raise ConfigError(
                f"Field must be a dictionary, got {type(raw).__name__}",
                'content_type_extensions'
            )

        for content_type, extension in raw.items():
            if not isinstance(content_type, str) or not isinstance(extension, str):
                raise ConfigError(
                    "Content types and extensions must be strings",
                    'content_type_extensions'
                )
            extension = extension.strip().lstrip('.')
            if not extension:
                raise ConfigError(
                    f"Extension for '{content_type}' cannot be empty",
                    'content_type_extensions'
                )
            extensions[content_type.strip().lower()] = extension

        return extensions
