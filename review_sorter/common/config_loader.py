"""
Configuration Loader

Loads YAML configuration files for the admin panel settings
and the locale strings used by the segment template.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Used for any key missing from config/settings.yaml
DEFAULT_SETTINGS: Dict[str, Any] = {
    'metafield_namespace': 'custom',
    'metafield_key': 'Review',
    'products_first': 50,
    'collections_first': 50,
    'rating_scale': 5,
    'admin_host': '127.0.0.1',
    'admin_port': 8765,
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Path of the config file relative to config/ (e.g., 'settings.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load admin panel settings.

    Values from settings.yaml are merged over DEFAULT_SETTINGS, then
    explicit overrides (e.g. from CLI flags) are applied on top.

    Returns:
        Dictionary of settings

    Example:
        {
            'metafield_namespace': 'custom',
            'metafield_key': 'Review',
            'products_first': 50,
            ...
        }
    """
    settings = dict(DEFAULT_SETTINGS)
    settings.update(load_config('settings.yaml').get('settings', {}))

    if overrides:
        settings.update({k: v for k, v in overrides.items() if v is not None})

    return settings


def load_translations(locale: str = 'en') -> Dict[str, str]:
    """
    Load translated strings for a locale.

    Args:
        locale: Locale code matching a file under config/locales/

    Returns:
        Dictionary mapping translation key to text

    Raises:
        FileNotFoundError: If there is no file for the locale
    """
    config = load_config(f'locales/{locale}.yaml')
    return config.get('translations', {})
