"""
CLI command to initialize the router configuration
"""

from pathlib import Path
from typing import Optional

from .config_discovery import LOCAL_CONFIG_NAME
from .config_template import CONFIG_TEMPLATE


def run_init_command(force: bool = False, path: Optional[str] = None) -> int:
    """
    Generate a configuration file in current directory or custom path

    Args:
        force: If True, overwrite existing config file
        path: Custom path for config file. If None, creates ./router_config.yaml

    Returns:
        Exit code (0 = success, 1 = error)
    """
    config_path = Path(path or LOCAL_CONFIG_NAME).resolve()

    if config_path.exists() and not force:
        print(f"❌ Config already exists: {config_path}")
        print("   Use --force to overwrite")
        return 1

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(CONFIG_TEMPLATE, encoding='utf-8')
    except OSError as e:
        print(f"❌ Failed to write config file: {config_path}")
        print(f"   Error: {e}")
        return 1

    print(f"✅ Config created: {config_path}")
    print("\nNext steps:")
    print(f"  1. Adjust grid and smoothing settings in {config_path}")
    print("  2. Route between two entities of a scene:")
    print("     spaghetti-router route scene.yaml --from A --to B")

    return 0
