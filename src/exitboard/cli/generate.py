"""Generate command for creating default config."""

from pathlib import Path

import yaml

from ..models import ExitboardConfig
from ..services.config_service import ConfigService
from .output import info, success

CONFIG_HEADER = """\
# exitboard Board Configuration
#
# provider:  "file" stores tasks as markdown files under task_root,
#            "http" uses the task REST API (EXITBOARD_API_URL / EXITBOARD_API_KEY)
# task_root: Relative path to directory containing task files
#
# Columns:
#   - Shown left to right in list order
#   - id must be lowercase with underscores; it is the task status value
#   - limit (optional): WIP cap, the column is flagged when exceeded
#   - color (optional): named color or hex (#22c55e)

"""


def generate_config_yaml(task_root: str = ".tasks") -> str:
    """Render the default ExitboardConfig as commented YAML."""
    config_dict = ExitboardConfig.default().model_dump(exclude_none=True)
    config_dict["task_root"] = task_root
    yaml_content = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """
    Generate default configuration and the task directory.

    Returns:
        Exit code (0 = something was created, 1 = nothing to do)
    """
    created = False
    config_path = project_root / ConfigService.CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
    else:
        project_root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_yaml())
        success(f"Generated config: {config_path}")
        created = True

    task_dir = ConfigService(project_root).task_root
    if task_dir.exists():
        info(f"Directory exists: {task_dir}/")
    else:
        task_dir.mkdir(parents=True)
        success(f"Created directory: {task_dir}/")
        created = True

    if not created:
        print("Nothing to generate.")
        return 1
    return 0
