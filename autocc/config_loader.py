"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from typing import Optional
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULTS = {
    'log_dir': 'logs',
    'log_file': 'autocc.log',
    'backend': 'huggingface',
    'device': 'cuda',
    'translation_model_template': 'Helsinki-NLP/opus-mt-{source}-{target}',
    'deepl_api_url': 'https://api-free.deepl.com/v2/',
    'catalog': 'local',
    'catalog_root': 'videos',
    'target_languages': [],
    'metadata_separator': ';',
    'request_timeout_seconds': 30,
}

# Environment variables that take precedence over file values
ENV_OVERRIDES = {
    'AUTOCC_DEEPL_API_KEY': 'deepl_api_key',
    'AUTOCC_CATALOG_URL': 'catalog_url',
}

class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: Optional[str]) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Missing keys are filled from DEFAULTS, then environment overrides
        are applied. A None path yields defaults plus environment only.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        config = dict(DEFAULTS)
        if config_path is not None:
            config.update(self._read_file(config_path))

        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                logger.info(f"Using {env_name} from environment for '{key}'")
                config[key] = value

        targets = config.get('target_languages') or []
        if isinstance(targets, str):
            targets = [t.strip() for t in targets.split(',') if t.strip()]
        if not isinstance(targets, list):
            raise ConfigurationError("'target_languages' must be a list of language codes.")
        config['target_languages'] = [str(t) for t in targets]
        return config

    def _read_file(self, config_path: str) -> dict:
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            logger.error(f"Configuration path is not a file: {config_path}")
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if config is None:
            logger.warning(f"Configuration file {config_path} is empty. Using defaults.")
            return {}
        if not isinstance(config, dict):
            # Handle cases where YAML loads something other than a dictionary (e.g., just a string)
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config
