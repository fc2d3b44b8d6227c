"""
Configuration Loader - Handles IO operations for configuration management.

This module is responsible for loading and saving configuration from/to
various sources (YAML files, environment variables) while keeping the
ApplicationConfig class focused on data representation and validation.
"""

import os

import yaml

from uow_rules_engine.application.config import (
    ApplicationConfig,
    Environment,
    LoggingConfig,
    WorkActionConfiguration,
)


class ConfigLoader:
    """Handles loading and saving of configuration from various sources."""

    @classmethod
    def from_env(cls) -> ApplicationConfig:
        """
        Create configuration from environment variables.

        Returns:
            ApplicationConfig: Configuration loaded from environment
        """
        env_str = os.getenv("ENVIRONMENT", "development")
        try:
            environment = Environment(env_str)
        except ValueError:
            raise ValueError(f"Invalid environment: {env_str}")

        return ApplicationConfig(
            environment=environment,
            work_action=WorkActionConfiguration.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_yaml(cls, path: str) -> ApplicationConfig:
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            ApplicationConfig: Configuration loaded from YAML file
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        config = ApplicationConfig()

        # Handle empty or null YAML files
        if not data:
            return config

        if "environment" in data:
            try:
                config.environment = Environment(data["environment"])
            except ValueError:
                raise ValueError(f"Invalid environment: {data['environment']}")

        if "work_action" in data:
            action_data = data["work_action"] or {}
            defaults = config.work_action
            timeout = action_data.get("timeout_seconds", defaults.timeout_seconds)
            config.work_action = WorkActionConfiguration(
                stop_rule_processing_on_first_failure=action_data.get(
                    "stop_rule_processing_on_first_failure",
                    defaults.stop_rule_processing_on_first_failure,
                ),
                use_exception_message_during_exception_handling=action_data.get(
                    "use_exception_message_during_exception_handling",
                    defaults.use_exception_message_during_exception_handling,
                ),
                generic_exception_message=action_data.get(
                    "generic_exception_message", defaults.generic_exception_message
                ),
                timeout_seconds=float(timeout) if timeout is not None else None,
            )

        if "logging" in data:
            log_data = data["logging"] or {}
            config.logging = LoggingConfig(
                level=log_data.get("level", config.logging.level),
                format=log_data.get("format", config.logging.format),
                file=log_data.get("file", config.logging.file),
                max_bytes=log_data.get("max_bytes", config.logging.max_bytes),
                backup_count=log_data.get("backup_count", config.logging.backup_count),
            )

        return config

    @classmethod
    def to_yaml(cls, config: ApplicationConfig) -> str:
        """
        Convert configuration to YAML string.

        Args:
            config: ApplicationConfig instance to convert

        Returns:
            str: YAML representation of the configuration
        """
        return yaml.dump(config.to_dict(), default_flow_style=False)

    @classmethod
    def save_to_yaml(cls, config: ApplicationConfig, path: str) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: ApplicationConfig instance to save
            path: Path to save the YAML file to
        """
        yaml_content = cls.to_yaml(config)
        with open(path, "w") as f:
            f.write(yaml_content)
